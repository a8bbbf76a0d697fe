"""Simple client harness: registers a client over HTTP, opens the signal socket,
runs a search and a preview and prints every signal that comes back.

Run: python scripts/client_harness.py "/emoji laugh"
"""
import asyncio
import json
import sys

import httpx
import websockets

BASE = "http://127.0.0.1:8765"


def env(**data):
    return json.dumps({"v": "1.0", "data": data})


async def drain(ws, n):
    for _ in range(n):
        msg = json.loads(await asyncio.wait_for(ws.recv(), timeout=5))
        print(msg["signal"], msg["args"][:3])
        yield msg


async def run(query):
    async with httpx.AsyncClient(base_url=BASE) as client:
        r = await client.post("/clients/start")
        js = r.json()
        cid = js["client_id"]
        token = js["token"]
        print("client", cid)

        r = await client.post("/engine/ResolveCommand", content=env(text=query))
        print("resolved:", r.json()["data"])

        async with websockets.connect(f"ws://127.0.0.1:8765/ws/{cid}?token={token}") as ws:
            print("server ack:", await ws.recv())

            r = await client.post("/engine/Search", content=env(text=query))
            print("token:", r.json()["token"])

            first_key = None
            async for msg in drain(ws, 2):
                batch = json.loads(msg["args"][3])["data"]
                for it in batch.get("items", [])[:5]:
                    print(f"  {it['score']:.2f}  {it['key']:<30} {it['title']}")
                    first_key = first_key or it["key"]

            if first_key:
                await client.post("/engine/RequestPreview", content=env(key=first_key, epoch=msg["args"][0]))
                async for msg in drain(ws, 1):
                    print(json.loads(msg["args"][-1])["data"])


if __name__ == '__main__':
    asyncio.run(run(sys.argv[1] if len(sys.argv) > 1 else "/emoji laugh"))
