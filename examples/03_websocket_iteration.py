"""
Iterate over WebSocket messages with ``async for``.

This example demonstrates:
- ``websocket.iter_text()`` instead of ``while True`` and ``receive_text()``
- The loop ending on client disconnect without ``WebSocketDisconnect``

Usage:
    python 03_websocket_iteration.py

Test with websocat (https://github.com/vi/websocat):
    websocat ws://localhost:8000/ws
    # type a few lines, then Ctrl+D: the server logs the disconnect
"""

import logging

import uvicorn

from fastapi_tips.websocket import create_app

log_fmt = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
datefmt = "%Y-%m-%d %H:%M:%S"
logging.basicConfig(format=log_fmt, level=logging.DEBUG, datefmt=datefmt)

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
