# config.py
DEFAULT_HOST: str = "localhost"
DEFAULT_PORT: int = 8000
DEFAULT_NODE_COUNT: int = 3     # node1..nodeN seeded by the launcher
CID_HASH: str = "sha256"        # hashlib name used for content identifiers
LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
