import hashlib

from .config import CID_HASH


class ContentStore:
    def __init__(self):
        self.data = {}  # cid -> payload

    @staticmethod
    def generate_cid(payload):
        """Hex digest of the payload bytes. str payloads are hashed as UTF-8."""
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        elif not isinstance(payload, (bytes, bytearray)):
            raise TypeError(f"payload must be str or bytes, not {type(payload).__name__}")
        return hashlib.new(CID_HASH, payload).hexdigest()

    def get(self, cid):
        return self.data.get(cid)

    def put(self, payload):
        cid = self.generate_cid(payload)
        if cid not in self.data:
            # stored values must not change under their cid
            if isinstance(payload, bytearray):
                payload = bytes(payload)
            self.data[cid] = payload
        return cid

    def has(self, cid):
        return cid in self.data

    def size(self):
        return len(self.data)

    def cids(self):
        return list(self.data.keys())
