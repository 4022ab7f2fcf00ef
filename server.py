import asyncio
import logging

from cidnet.config import DEFAULT_NODE_COUNT, DEFAULT_PORT, LOG_FORMAT
from cidnet.http_server import NetworkHTTPServer
from cidnet.replication_network import ReplicationNetwork

async def main():
    network = ReplicationNetwork(f"node{i+1}" for i in range(DEFAULT_NODE_COUNT))
    server = NetworkHTTPServer(network, port=DEFAULT_PORT)
    await server.start()

    print("\nTry these commands in another terminal:")
    print(f"curl -X PUT {server.address}/content -H 'Content-Type: application/json' -d '{{\"data\": \"PLDG FTW!!!!\"}}'")
    print(f"curl {server.address}/content/<cid>")
    print(f"curl -X DELETE {server.address}/nodes/node1")
    print(f"curl {server.address}/status")

    try:
        while True:
            await asyncio.sleep(1)
    finally:
        await server.stop()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutting down...")
