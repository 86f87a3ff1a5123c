"""
Sync dependencies run on worker threads.

This example demonstrates:
- A sync dependency executing off the event loop thread
- The async equivalent staying on the event loop thread

Usage:
    python 07_threaded_dependencies.py

Test with curl:
    curl http://localhost:8000/sync
    curl http://localhost:8000/async
"""

import logging
import threading

import uvicorn
from fastapi import Depends, FastAPI

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Threaded dependencies")


def sync_thread_name() -> str:
    return threading.current_thread().name


async def async_thread_name() -> str:
    return threading.current_thread().name


@app.get("/sync")
async def sync_dependency(dependency_thread: str = Depends(sync_thread_name)) -> dict:
    return {
        "dependency": dependency_thread,
        "endpoint": threading.current_thread().name,
    }


@app.get("/async")
async def async_dependency(dependency_thread: str = Depends(async_thread_name)) -> dict:
    return {
        "dependency": dependency_thread,
        "endpoint": threading.current_thread().name,
    }


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
