"""
WebSocket iteration.

``websocket.iter_text()`` and friends stop on ``websocket.disconnect`` instead
of raising ``WebSocketDisconnect``, so an ``async for`` loop needs neither a
``while True`` nor a ``try``/``except`` around it.
"""
import logging
from typing import Any, AsyncIterator

from starlette.applications import Starlette
from starlette.routing import WebSocketRoute
from starlette.websockets import WebSocket

logger = logging.getLogger(__name__)

MODES = ("text", "bytes", "json")


def iterate_messages(websocket: WebSocket, mode: str = "text") -> AsyncIterator[Any]:
    if mode == "text":
        return websocket.iter_text()
    if mode == "bytes":
        return websocket.iter_bytes()
    if mode == "json":
        return websocket.iter_json()
    raise ValueError(f"mode must be one of: {', '.join(MODES)}, got: {mode}")


async def echo_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    received = 0
    async for message in iterate_messages(websocket):
        received += 1
        logger.debug("message %s: %s", received, message)
        await websocket.send_text(message)
    logger.info(
        "Client %s disconnected after %s message(s)", websocket.client, received
    )


def create_app() -> Starlette:
    return Starlette(routes=[WebSocketRoute("/ws", echo_endpoint)])
