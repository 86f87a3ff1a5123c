"""
A pure ASGI middleware in front of a streaming endpoint.

This example demonstrates:
- ``ProcessTimeMiddleware`` adding a header without buffering the body
- Streaming chunks reaching the client as they are produced

Usage:
    python 06_pure_asgi_middleware.py

Test with curl:
    curl -i http://localhost:8000/
    curl -N http://localhost:8000/stream
"""

import asyncio
import logging
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from starlette.responses import StreamingResponse

from fastapi_tips.middleware import ProcessTimeMiddleware

logging.basicConfig(level=logging.DEBUG)

app = FastAPI(title="Pure ASGI middleware")
app.add_middleware(ProcessTimeMiddleware)


@app.get("/")
async def read_root() -> dict:
    return {"Hello": "World"}


async def numbers(count: int) -> AsyncIterator[str]:
    for number in range(1, count + 1):
        await asyncio.sleep(0.5)
        yield f"{number}\n"


@app.get("/stream")
async def stream() -> StreamingResponse:
    return StreamingResponse(numbers(10), media_type="text/plain")


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
