"""
Serve an app with uvloop and httptools.

This example demonstrates:
- Selecting the event loop and HTTP parser explicitly
- Falling back to asyncio/h11 when the extras are not installed

Usage:
    pip install "uvicorn[standard]"
    python 01_uvloop_httptools.py

Test with curl:
    curl http://localhost:8000/
"""

import asyncio
import importlib.util
import logging

import uvicorn
from fastapi import FastAPI

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="uvloop and httptools")


@app.get("/")
async def read_root() -> dict:
    loop = asyncio.get_running_loop()
    return {"loop": type(loop).__module__}


def installed(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


if __name__ == "__main__":
    loop = "uvloop" if installed("uvloop") else "asyncio"
    http = "httptools" if installed("httptools") else "h11"
    logger.info("Serving with loop=%s http=%s", loop, http)

    uvicorn.run(app, host="127.0.0.1", port=8000, loop=loop, http=http)
