import logging
import time

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class ProcessTimeMiddleware:
    """
    Pure ASGI middleware adding the request processing time as a header.

    Unlike ``BaseHTTPMiddleware`` it does not wrap the app in an extra task
    and never buffers the body, so streaming responses and context variables
    behave as without the middleware.
    """

    DEFAULT_HEADER_NAME = "X-Process-Time"

    def __init__(self, app: ASGIApp, header_name: str = DEFAULT_HEADER_NAME) -> None:
        if not header_name:
            raise ValueError("header_name must not be empty")
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                elapsed = time.perf_counter() - start
                # headers are optional on the start message
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                headers.append(self.header_name, f"{elapsed:.6f}")
                logger.debug("%s %s took %.6fs", scope["method"], scope["path"], elapsed)
            await send(message)

        await self.app(scope, receive, send_wrapper)
