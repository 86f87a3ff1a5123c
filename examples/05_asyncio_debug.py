"""
Spot blocking calls with asyncio debug mode.

This example demonstrates:
- Turning on debug mode from the lifespan
- The ``Executing <Task ...> took N seconds`` warning for a blocking endpoint

Usage:
    python 05_asyncio_debug.py
    # or, equivalently
    PYTHONASYNCIODEBUG=1 python 05_asyncio_debug.py

Test with curl:
    curl http://localhost:8000/blocking   # watch the server log
    curl http://localhost:8000/fine
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from fastapi_tips.debug import debug_enabled, enable_asyncio_debug

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not debug_enabled():
        enable_asyncio_debug(slow_callback_duration=0.1)
    yield


app = FastAPI(title="AsyncIO debug mode", lifespan=lifespan)


@app.get("/blocking")
async def blocking() -> dict:
    time.sleep(1)  # blocks the event loop on purpose
    return {"blocked": 1}


@app.get("/fine")
async def fine() -> dict:
    await asyncio.sleep(1)
    return {"slept": 1}


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
