import asyncio

from aiohttp.test_utils import TestClient, TestServer

from cidnet.content_store import ContentStore
from cidnet.http_server import NetworkHTTPServer
from cidnet.replication_network import ReplicationNetwork


def run_with_client(network, scenario):
    async def runner():
        server = NetworkHTTPServer(network)
        async with TestClient(TestServer(server.app)) as client:
            await scenario(client)

    asyncio.run(runner())


def test_put_then_get_roundtrip():
    network = ReplicationNetwork(["node1", "node2", "node3", "node4"])

    async def scenario(client):
        resp = await client.put("/content", json={"data": "PLDG FTW!!!!"})
        assert resp.status == 200
        body = await resp.json()
        assert body["cid"] == ContentStore.generate_cid("PLDG FTW!!!!")
        assert body["replication_factor"] == 2
        assert body["stored_on"] == ["node1", "node2"]
        assert body["under_replicated"] is False
        assert body["node_count"] == 4

        resp = await client.get(f"/content/{body['cid']}")
        assert resp.status == 200
        fetched = await resp.json()
        assert fetched["data"] == "PLDG FTW!!!!"
        assert fetched["source_node"] == "node1"

        resp = await client.get(f"/content/{body['cid']}/locations")
        assert (await resp.json())["nodes"] == ["node1", "node2"]

    run_with_client(network, scenario)


def test_put_rejects_missing_data_and_bad_json():
    network = ReplicationNetwork(["node1"])

    async def scenario(client):
        resp = await client.put("/content", json={"value": "wrong key"})
        assert resp.status == 400
        assert "Missing 'data'" in (await resp.json())["error"]

        resp = await client.put("/content", data="not json",
                                headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert "Invalid JSON" in (await resp.json())["error"]

    run_with_client(network, scenario)


def test_get_unknown_cid_is_404():
    network = ReplicationNetwork(["node1"])

    async def scenario(client):
        resp = await client.get(f"/content/{'0' * 64}")
        assert resp.status == 404
        assert "error" in await resp.json()

    run_with_client(network, scenario)


def test_put_on_empty_network_is_under_replicated():
    network = ReplicationNetwork()

    async def scenario(client):
        resp = await client.put("/content", json={"data": "nowhere"})
        assert resp.status == 200
        body = await resp.json()
        assert body["stored_on"] == []
        assert body["under_replicated"] is True

        resp = await client.get(f"/content/{body['cid']}")
        assert resp.status == 404

    run_with_client(network, scenario)


def test_node_management_and_status():
    network = ReplicationNetwork()

    async def scenario(client):
        resp = await client.post("/nodes/A")
        assert (await resp.json()) == {"node_id": "A", "replaced": False, "node_count": 1}
        await client.post("/nodes/B")

        resp = await client.post("/nodes/A")
        assert (await resp.json())["replaced"] is True

        resp = await client.put("/content", json={"data": "x"})
        cid = (await resp.json())["cid"]

        resp = await client.get("/status")
        assert (await resp.json()) == {
            "node_count": 2,
            "replication_factor": 1,
            "nodes": {"A": 1, "B": 0},
        }

        resp = await client.delete("/nodes/A")
        assert resp.status == 200
        resp = await client.get(f"/content/{cid}")
        assert resp.status == 404

        resp = await client.delete("/nodes/A")
        assert resp.status == 404

    run_with_client(network, scenario)
