import logging

from aiohttp import web

from .config import DEFAULT_HOST, DEFAULT_PORT
from .replication_network import ReplicationNetwork

logger = logging.getLogger(__name__)


class NetworkHTTPServer:
    def __init__(self, network=None, host=DEFAULT_HOST, port=DEFAULT_PORT):
        self.network = network if network is not None else ReplicationNetwork()
        self.host = host
        self.port = port
        self.address = f"http://{host}:{port}"
        self.runner = None
        self.app = self._create_app()

    def _create_app(self):
        app = web.Application()

        app.router.add_put('/content', self.handle_put)
        app.router.add_get('/content/{cid}', self.handle_get)
        app.router.add_get('/content/{cid}/locations', self.handle_locate)

        app.router.add_post('/nodes/{node_id}', self.handle_add_node)
        app.router.add_delete('/nodes/{node_id}', self.handle_remove_node)
        app.router.add_get('/status', self.handle_status)

        return app

    async def handle_put(self, request):
        try:
            body = await request.json()
        except ValueError as e:
            return web.json_response({"error": f"Invalid JSON: {e}"}, status=400)

        data = body.get('data') if isinstance(body, dict) else None
        if data is None:
            return web.json_response({"error": "Missing 'data' in request"}, status=400)

        cid = self.network.put(str(data))
        result = self.network.last_put

        return web.json_response({
            "cid": cid,
            "replication_factor": result.replication_factor,
            "stored_on": result.stored_on,
            "under_replicated": result.under_replicated,
            "node_count": self.network.node_count()
        })

    async def handle_get(self, request):
        cid = request.match_info['cid']
        data, source_node = self.network.get_with_source(cid)

        if data is None:
            return web.json_response({"error": "Content not found on any node"}, status=404)

        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8", errors="replace")
        return web.json_response({"cid": cid, "data": data, "source_node": source_node})

    async def handle_locate(self, request):
        cid = request.match_info['cid']
        return web.json_response({"cid": cid, "nodes": self.network.locate(cid)})

    async def handle_add_node(self, request):
        node_id = request.match_info['node_id']
        replaced = self.network.add_node(node_id)
        return web.json_response({
            "node_id": node_id,
            "replaced": replaced,
            "node_count": self.network.node_count()
        })

    async def handle_remove_node(self, request):
        node_id = request.match_info['node_id']

        if self.network.remove_node(node_id):
            return web.json_response({"message": f"Node '{node_id}' removed (simulated failure)"})
        else:
            return web.json_response({"error": f"Node '{node_id}' not found"}, status=404)

    async def handle_status(self, request):
        return web.json_response(self.network.status())

    async def start(self):
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        site = web.TCPSite(self.runner, self.host, self.port)
        await site.start()

        logger.info(f"Gateway listening on {self.address}")
        print(f"CID network gateway running on {self.address}")
        print("Routes:")
        print("  PUT    /content                  - Store data (JSON: {\"data\": ...})")
        print("  GET    /content/{cid}            - Retrieve data")
        print("  GET    /content/{cid}/locations  - Nodes holding a CID")
        print("  POST   /nodes/{node_id}          - Add a node")
        print("  DELETE /nodes/{node_id}          - Remove a node (simulated failure)")
        print("  GET    /status                   - Network status")

    async def stop(self):
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
