"""
Thread pool sizing.

Sync endpoints, sync dependencies and ``run_in_threadpool`` all borrow a
token from anyio's default thread limiter, which holds 40 tokens. When every
token is taken, further blocking calls wait for a thread to free up.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, TypeVar

import anyio.to_thread
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

DEFAULT_THREAD_LIMIT = 40

T = TypeVar("T")


def _validate_tokens(total_tokens: int) -> None:
    if isinstance(total_tokens, bool) or not isinstance(total_tokens, int):
        raise TypeError("total_tokens must be int")
    if total_tokens < 1:
        raise ValueError("total_tokens must be at least 1")


def get_thread_limit() -> int:
    """Token count of the running loop's default thread limiter."""
    limiter = anyio.to_thread.current_default_thread_limiter()
    return int(limiter.total_tokens)


def set_thread_limit(total_tokens: int) -> int:
    """Change the default thread limiter of the running loop.

    Returns the previous token count. Must be called from inside the event
    loop, typically in the lifespan.
    """
    _validate_tokens(total_tokens)
    limiter = anyio.to_thread.current_default_thread_limiter()
    previous = int(limiter.total_tokens)
    limiter.total_tokens = total_tokens
    logger.debug("thread limiter: %s -> %s tokens", previous, total_tokens)
    return previous


def thread_limit_lifespan(total_tokens: int) -> Callable[[Any], Any]:
    """Lifespan that resizes the thread pool for the life of the app."""
    # fail at app construction, not at startup
    _validate_tokens(total_tokens)

    @asynccontextmanager
    async def lifespan(app: Any) -> AsyncIterator[None]:
        previous = set_thread_limit(total_tokens)
        logger.info("Thread pool limited to %s tokens", total_tokens)
        try:
            yield
        finally:
            set_thread_limit(previous)
            logger.info("Thread pool restored to %s tokens", previous)

    return lifespan


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking callable on the same pool sync endpoints use."""
    logger.debug("offloading %s to the thread pool", getattr(func, "__name__", func))
    return await run_in_threadpool(func, *args, **kwargs)
