from __future__ import annotations

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from loguru import logger

from ..relay import BroadcastRelay

router = APIRouter(prefix="", tags=["ws"])

WS_PATH = "/ws"


async def _receive_frame(ws: WebSocket):
    """Return the next text or binary frame, raising on disconnect."""
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000))
    if message.get("text") is not None:
        return message["text"]
    return message.get("bytes") or b""


@router.websocket(WS_PATH)
async def relay_endpoint(ws: WebSocket):
    relay: BroadcastRelay = ws.app.state.relay
    await ws.accept()
    logger.info("Client connected: {}", ws.client)
    try:
        while True:
            raw = await _receive_frame(ws)
            await relay.handle_message(raw, ws)
    except WebSocketDisconnect as exc:
        logger.info("Client {} closed the socket (code {})", ws.client, exc.code)
    except Exception as exc:
        logger.exception("WebSocket error: {}", exc)
    finally:
        await relay.disconnect(ws)
