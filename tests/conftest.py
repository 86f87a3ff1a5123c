import logging
from pathlib import Path

import httpx
import pytest
from asgi_lifespan import LifespanManager

from fastapi_tips.lifespan import create_app

_log = logging.getLogger(__name__)
log_fmt = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
datefmt = "%Y-%m-%d %H:%M:%S"
logging.basicConfig(format=log_fmt, level=logging.DEBUG, datefmt=datefmt)

logging.getLogger("httpx").setLevel(logging.INFO)
logging.getLogger("httpcore").setLevel(logging.INFO)

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def anyio_backend():
    """Exclude trio from tests"""
    return "asyncio"


@pytest.fixture
def readme_path() -> Path:
    return ROOT / "README.md"


def upstream(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text=f"upstream saw {request.url.path}")


@pytest.fixture
def upstream_transport() -> httpx.MockTransport:
    return httpx.MockTransport(upstream)


@pytest.fixture
async def app(upstream_transport):
    app = create_app(transport=upstream_transport)
    async with LifespanManager(app) as manager:
        _log.info("We're in!")
        yield manager.app
        _log.info("We're out!")


@pytest.fixture
async def httpx_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        _log.info("Yielding Client")
        yield client
