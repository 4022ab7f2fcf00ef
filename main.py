#!/usr/bin/env python3

import argparse
import asyncio
import logging
import signal
import sys

from cidnet.config import DEFAULT_HOST, DEFAULT_NODE_COUNT, DEFAULT_PORT, LOG_FORMAT
from cidnet.http_server import NetworkHTTPServer
from cidnet.replication_network import ReplicationNetwork

DEMO_PAYLOAD = "PLDG FTW!!!!"

class NetworkCluster:
    def __init__(self, num_nodes=DEFAULT_NODE_COUNT, host=DEFAULT_HOST, port=DEFAULT_PORT):
        self.num_nodes = num_nodes
        self.network = ReplicationNetwork()
        self.server = NetworkHTTPServer(self.network, host=host, port=port)
        self.running = False

    def seed_nodes(self):
        for i in range(self.num_nodes):
            self.network.add_node(f"node{i+1}")
        return self.network.node_ids()

    async def start_cluster(self):
        print("Starting CID Replication Network...")
        print(f"   Nodes: {self.num_nodes}")
        print("=" * 50)

        self.seed_nodes()
        await self.server.start()

        print("\nNetwork is ready!")
        print(f"   Nodes: {self.network.node_ids()}")
        print(f"   Replication factor: {self.network.replication_factor()}")

        self.running = True
        return self.network

    async def stop_cluster(self):
        """Stop the gateway"""
        print("\nStopping network gateway...")
        await self.server.stop()
        self.running = False
        print("Gateway stopped")

    async def keep_running(self):
        while self.running:
            await asyncio.sleep(1)

def run_demo(num_nodes=DEFAULT_NODE_COUNT):
    network = ReplicationNetwork(f"node{i+1}" for i in range(num_nodes))

    cid = network.put(DEMO_PAYLOAD)
    print(f"Data stored with CID: {cid}")
    print(f"Replicas: {network.locate(cid)}")

    data = network.get(cid)
    if data is not None:
        print(f"Retrieved data: {data}")
    else:
        print("Data not found in the network.")

    network.remove_node("node1")

    data = network.get(cid)
    if data is not None:
        print(f"Retrieved data after failure: {data}")
    else:
        print("Data unavailable across the network.")

    return cid, data

async def run_cluster_only(args):
    cluster = NetworkCluster(args.nodes, args.host, args.port)

    try:
        await cluster.start_cluster()

        print("\n" + "=" * 60)
        print("NETWORK READY FOR CONNECTIONS!")
        print("=" * 60)
        print("You can now:")
        print("• Run the shell: python shell.py")
        print("• Use curl commands")
        print("\nPress Ctrl+C to stop")
        print("=" * 60)

        await cluster.keep_running()
    finally:
        await cluster.stop_cluster()

async def run_cluster_and_shell(args):
    from shell import NetworkShell

    cluster = NetworkCluster(args.nodes, args.host, args.port)

    try:
        await cluster.start_cluster()

        print("\n" + "=" * 60)
        print("NETWORK READY! Starting interactive shell...")
        print("=" * 60)

        shell = NetworkShell(cluster.server.address)
        await shell.start()
    finally:
        await cluster.stop_cluster()

def show_menu():
    print("CID Replication Network")
    print("=" * 40)
    print("Choose an option:")
    print("1. Run scripted failure demo")
    print("2. Start gateway + interactive shell")
    print("3. Start gateway only (background)")
    print("4. Exit")
    print("=" * 40)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Content-addressed replication network simulator")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--demo", action="store_true", help="store, fail node1, retrieve again")
    mode.add_argument("--serve", action="store_true", help="start the HTTP gateway only")
    mode.add_argument("--shell", action="store_true", help="start the gateway and the shell")
    parser.add_argument("--nodes", type=int, default=DEFAULT_NODE_COUNT, help="number of nodes to seed")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--log-level", default="INFO", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)

async def main(args):
    if args.demo:
        run_demo(args.nodes)
        return
    if args.serve:
        await run_cluster_only(args)
        return
    if args.shell:
        await run_cluster_and_shell(args)
        return

    while True:
        try:
            show_menu()
            choice = input("Enter choice (1-4): ").strip()

            if choice == "1":
                run_demo(args.nodes)
                print("\n" + "=" * 50 + "\n")
            elif choice == "2":
                await run_cluster_and_shell(args)
                break
            elif choice == "3":
                await run_cluster_only(args)
                break
            elif choice == "4":
                print("Goodbye!")
                break
            else:
                print("Invalid choice. Please try again.\n")

        except EOFError:
            break

if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    if sys.platform != "win32":
        def signal_handler(sig, frame):
            print("\nReceived interrupt signal, shutting down...")
            sys.exit(0)

        signal.signal(signal.SIGTERM, signal_handler)

    try:
        asyncio.run(main(args))
    except KeyboardInterrupt:
        print("\nGoodbye!")
