import logging
from dataclasses import dataclass, field
from typing import List

from .content_store import ContentStore

logger = logging.getLogger(__name__)


@dataclass
class PutResult:
    cid: str
    replication_factor: int
    stored_on: List[str] = field(default_factory=list)

    @property
    def under_replicated(self) -> bool:
        return len(self.stored_on) < self.replication_factor


class ReplicationNetwork:
    """In-process network of content stores keyed by node id.

    Nodes are visited in insertion order, so the stores that receive
    replicas and the store that answers a retrieval are reproducible.
    """

    def __init__(self, node_ids=()):
        self.nodes = {}  # node_id -> ContentStore
        self.last_put = None

        for node_id in node_ids:
            self.add_node(node_id)

    def add_node(self, node_id):
        """Add an empty store. Returns True if an existing node was replaced."""
        replaced = node_id in self.nodes
        self.nodes[node_id] = ContentStore()

        if replaced:
            logger.warning(f"Node '{node_id}' already existed; replaced with an empty store")
        else:
            logger.info(f"Added node {node_id} ({len(self.nodes)} nodes)")
        return replaced

    def node_ids(self):
        return list(self.nodes.keys())

    def node_count(self):
        return len(self.nodes)

    def replication_factor(self):
        total_nodes = len(self.nodes)

        # at least 1, at most the total number of nodes (the lower bound wins on an empty network)
        replication_factor = max(1, total_nodes // 2)
        if total_nodes > 0:
            replication_factor = min(replication_factor, total_nodes)
        return replication_factor

    def put(self, payload):
        replication_factor = self.replication_factor()
        logger.info(f"Replication factor {replication_factor} (based on {len(self.nodes)} nodes)")

        cid = ContentStore.generate_cid(payload)

        stored_on = []
        for node_id, store in self.nodes.items():
            if len(stored_on) >= replication_factor:
                break
            store.put(payload)
            stored_on.append(node_id)

        result = PutResult(cid=cid, replication_factor=replication_factor, stored_on=stored_on)
        if result.under_replicated:
            logger.warning(
                f"Could not replicate {cid} to all target nodes "
                f"(replicated: {len(stored_on)}/{replication_factor})"
            )
        else:
            logger.info(f"Stored {cid} on {stored_on}")

        self.last_put = result
        return cid

    def get_with_source(self, cid):
        for node_id, store in self.nodes.items():
            payload = store.get(cid)
            if payload is not None:
                logger.info(f"Found {cid} on node {node_id}")
                return payload, node_id

        logger.info(f"{cid} not found on any node")
        return None, None

    def get(self, cid):
        payload, _ = self.get_with_source(cid)
        return payload

    def locate(self, cid):
        """Node ids currently holding cid, in node order."""
        return [node_id for node_id, store in self.nodes.items() if store.has(cid)]

    def remove_node(self, node_id):
        """Drop a node and everything it stored (simulated failure)."""
        if node_id not in self.nodes:
            logger.info(f"Node '{node_id}' is not in the network; nothing removed")
            return False

        del self.nodes[node_id]
        logger.info(f"Node '{node_id}' has been removed (simulated failure)")
        return True

    def status(self):
        return {
            "node_count": len(self.nodes),
            "replication_factor": self.replication_factor(),
            "nodes": {node_id: store.size() for node_id, store in self.nodes.items()},
        }
