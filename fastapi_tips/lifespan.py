"""
Lifespan state.

Objects yielded from the lifespan as a mapping are shallow-copied into every
request's ``request.state``, scoped to the running app instance instead of
living on a global ``app.state``.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional, TypedDict

import httpx
from fastapi import FastAPI, HTTPException, Request

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class State(TypedDict):
    http_client: httpx.AsyncClient


def make_lifespan(
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Callable[[FastAPI], AsyncContextManager[State]]:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[State]:
        async with httpx.AsyncClient(
            transport=transport, timeout=DEFAULT_TIMEOUT
        ) as client:
            logger.debug("http client opened")
            yield {"http_client": client}
        logger.debug("http client closed")

    return lifespan


lifespan = make_lifespan()


async def proxy(request: Request, url: str) -> dict:
    client: httpx.AsyncClient = request.state.http_client
    try:
        response = await client.get(url)
    except httpx.RequestError as e:
        logger.info("GET %s failed: %r", url, e)
        raise HTTPException(status_code=502, detail=f"upstream unreachable: {url}") from e
    logger.debug("GET %s -> %s", url, response.status_code)
    return {"url": url, "status_code": response.status_code, "body": response.text}


def create_app(transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    app = FastAPI(lifespan=make_lifespan(transport))
    app.add_api_route("/proxy", proxy, methods=["GET"])
    return app
