import asyncio
import uuid
from typing import List

import uvicorn
from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from lancea.auth import create_client_token, verify_client_token
from lancea.bootstrap import build_engine
from lancea.bus import EventBus
from lancea.config import load_settings
from lancea.schemas.events import BaseEvent
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

settings = load_settings()
# provider registry is built once here and read-only afterwards
engine = build_engine(settings)
# every connected client receives every signal (bus semantics)
bus = EventBus(default_maxsize=settings.channel_maxsize)

app = FastAPI(title="lancea-engined", version="0.1.0")


async def _body_text(request: Request) -> str:
    raw = await request.body()
    return raw.decode("utf-8", errors="replace")


def _publish(events: List[BaseEvent]) -> None:
    for evt in events:
        bus.broadcast(evt.to_signal())


def _envelope_response(text: str) -> Response:
    return Response(content=text, media_type="application/json")


@app.get("/health")
async def health():
    return {"status": "ok", "providers": sorted(engine.providers)}


@app.post("/clients/start")
async def start_client():
    client_id = str(uuid.uuid4())
    token = create_client_token(client_id, settings.jwt_secret, ttl_sec=60 * 60)
    return JSONResponse({"client_id": client_id, "token": token})


@app.post("/engine/ResolveCommand")
async def resolve_command(request: Request):
    text = await _body_text(request)
    return _envelope_response(engine.resolve_command(text))


@app.post("/engine/Search")
async def search(request: Request):
    text = await _body_text(request)
    events: List[BaseEvent] = []
    token = await run_in_threadpool(engine.search, text, events.append)
    # signals go out before the caller sees the token
    _publish(events)
    return JSONResponse({"token": token})


@app.post("/engine/Cancel")
async def cancel(request: Request):
    text = await _body_text(request)
    engine.cancel(text)
    return JSONResponse({"ok": True})


@app.post("/engine/RequestPreview")
async def request_preview(request: Request):
    text = await _body_text(request)
    events: List[BaseEvent] = []
    await run_in_threadpool(engine.request_preview, text, events.append)
    _publish(events)
    return JSONResponse({"ok": True})


@app.post("/engine/Execute")
async def execute(request: Request):
    text = await _body_text(request)
    return _envelope_response(await run_in_threadpool(engine.execute, text))


async def _stop_forwarder(task: asyncio.Task, client_id: str) -> None:
    """Cancel a client's signal forwarder and collect its outcome."""
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    except Exception as e:
        # typically a send on a socket that already went away
        logger.debug("signal forwarder for %s stopped with %r", client_id, e)


@app.websocket("/ws/{client_id}")
async def ws_signals(websocket: WebSocket, client_id: str):
    token = websocket.query_params.get("token")
    if not token or verify_client_token(token, settings.jwt_secret) != client_id:
        await websocket.close(code=4403)
        return

    await websocket.accept()
    q = bus.subscribe(client_id)
    await websocket.send_json({"type": "ack", "client_id": client_id})

    async def _forward():
        while True:
            item = await q.get()
            await websocket.send_json(item)

    forwarder = asyncio.create_task(_forward())
    try:
        # inbound messages carry nothing; reading detects the disconnect
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("client %s disconnected", client_id)
    finally:
        bus.unregister_client(client_id)
        await _stop_forwarder(forwarder, client_id)


@app.get("/admin/metrics")
async def admin_metrics():
    return {"clients": bus.metrics(), "epoch": engine.orchestrator.current_epoch}


def main():
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
