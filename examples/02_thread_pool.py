"""
Sync endpoints share a bounded thread pool.

This example demonstrates:
- A sync endpoint occupying one thread limiter token per request
- Resizing the pool for the life of the app with a lifespan
- Offloading a blocking call from an async endpoint explicitly

Usage:
    python 02_thread_pool.py

Test with curl:
    # Fire 50 slow sync requests; only the configured number run at once
    seq 50 | xargs -P 50 -I{} curl -s http://localhost:8000/sync
    curl http://localhost:8000/limiter
    curl http://localhost:8000/offload
"""

import logging
import time

import anyio.to_thread
import uvicorn
from fastapi import FastAPI

from fastapi_tips.threadpool import run_blocking, thread_limit_lifespan

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

THREAD_LIMIT = 10

app = FastAPI(title="Thread pool", lifespan=thread_limit_lifespan(THREAD_LIMIT))


@app.get("/sync")
def sync_endpoint() -> dict:
    """Runs in the thread pool."""
    time.sleep(1)
    return {"slept": 1}


@app.get("/limiter")
async def limiter_statistics() -> dict:
    limiter = anyio.to_thread.current_default_thread_limiter()
    return {
        "total_tokens": limiter.total_tokens,
        "borrowed_tokens": limiter.borrowed_tokens,
    }


@app.get("/offload")
async def offload() -> dict:
    await run_blocking(time.sleep, 0.5)
    return {"slept": 0.5}


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
