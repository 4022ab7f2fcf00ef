#!/usr/bin/env python3

import asyncio
import sys
from typing import Optional

import aiohttp

from cidnet.config import DEFAULT_HOST, DEFAULT_PORT

class NetworkShell:
    def __init__(self, url: str = None):
        self.url = (url or f"http://{DEFAULT_HOST}:{DEFAULT_PORT}").rstrip("/")
        self.session: Optional[aiohttp.ClientSession] = None

    async def start(self):
        """Start the shell session"""
        self.session = aiohttp.ClientSession()

        print("Welcome to the CID Network Shell!")
        print(f"Connected to gateway: {self.url}")
        self.print_commands()
        print("=" * 60)

        try:
            while True:
                try:
                    command = input("cidnet> ").strip()

                    if not command:
                        continue

                    if command.lower() in ['quit', 'exit', 'q']:
                        break

                    await self.execute_command(command)

                except KeyboardInterrupt:
                    print("\nGoodbye!")
                    break
                except EOFError:
                    break
        finally:
            await self.session.close()

    def print_commands(self):
        print("\nCommands:")
        print("  put <text>          - Store text, replicated across the network")
        print("  get <cid>           - Retrieve content by CID")
        print("  locate <cid>        - List nodes holding a CID")
        print("  add <node_id>       - Add a node")
        print("  remove <node_id>    - Remove a node (simulated failure)")
        print("  status              - Show network status")
        print("  help                - Show this help")
        print("  quit                - Exit the shell")

    async def execute_command(self, command: str):
        """Execute a shell command"""
        cmd, _, rest = command.strip().partition(" ")
        cmd = cmd.lower()
        rest = rest.strip()

        try:
            if cmd == 'put' and rest:
                await self.put(rest)
            elif cmd == 'get' and rest:
                await self.get(rest)
            elif cmd == 'locate' and rest:
                await self.locate(rest)
            elif cmd == 'add' and rest:
                await self.add_node(rest)
            elif cmd == 'remove' and rest:
                await self.remove_node(rest)
            elif cmd == 'status':
                await self.status()
            elif cmd == 'help':
                self.print_commands()
            else:
                print("Invalid command. Type 'help' for available commands.")

        except aiohttp.ClientError as e:
            print(f"Network error: {e}")

    async def put(self, text: str):
        async with self.session.put(f"{self.url}/content", json={"data": text}) as resp:
            result = await resp.json()

            if resp.status == 200:
                print("PUT successful!")
                print(f"   CID: {result['cid']}")
                print(f"   Replicas: {len(result['stored_on'])}/{result['replication_factor']} {result['stored_on']}")
                if result['under_replicated']:
                    print("   Warning: under-replicated")
            else:
                print(f"PUT failed: {result.get('error', 'Unknown error')}")

    async def get(self, cid: str):
        async with self.session.get(f"{self.url}/content/{cid}") as resp:
            result = await resp.json()

            if resp.status == 200:
                print("GET successful!")
                print(f"   Data: {result['data']}")
                print(f"   Source: {result['source_node']}")
            else:
                print(f"GET failed: {result.get('error', 'Unknown error')}")

    async def locate(self, cid: str):
        async with self.session.get(f"{self.url}/content/{cid}/locations") as resp:
            result = await resp.json()
            nodes = result.get('nodes', [])
            print(f"Held by {len(nodes)} node(s): {nodes}")

    async def add_node(self, node_id: str):
        async with self.session.post(f"{self.url}/nodes/{node_id}") as resp:
            result = await resp.json()
            verb = "Replaced" if result.get('replaced') else "Added"
            print(f"{verb} node {result['node_id']} ({result['node_count']} nodes)")

    async def remove_node(self, node_id: str):
        async with self.session.delete(f"{self.url}/nodes/{node_id}") as resp:
            result = await resp.json()

            if resp.status == 200:
                print(result['message'])
            else:
                print(f"REMOVE failed: {result.get('error', 'Unknown error')}")

    async def status(self):
        async with self.session.get(f"{self.url}/status") as resp:
            result = await resp.json()

            print("Network Status:")
            print(f"   Nodes: {result['node_count']}")
            print(f"   Replication Factor: {result['replication_factor']}")
            for node_id, count in result['nodes'].items():
                print(f"   {node_id}: {count} CIDs")

async def main():
    url = sys.argv[1] if len(sys.argv) > 1 else None

    shell = NetworkShell(url)
    await shell.start()

if __name__ == "__main__":
    asyncio.run(main())
