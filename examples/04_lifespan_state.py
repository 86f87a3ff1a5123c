"""
Share an HTTP client through lifespan state.

This example demonstrates:
- Yielding a typed state mapping from the lifespan
- Reading it back from ``request.state`` in an endpoint

Usage:
    python 04_lifespan_state.py

Test with curl:
    curl "http://localhost:8000/proxy?url=https://www.example.com/"
"""

import logging

import uvicorn

from fastapi_tips.lifespan import create_app

logging.basicConfig(level=logging.DEBUG)

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
