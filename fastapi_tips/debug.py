import asyncio
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_SLOW_CALLBACK_DURATION = 0.1


def debug_enabled() -> bool:
    """True when ``PYTHONASYNCIODEBUG`` asks for asyncio debug mode."""
    return bool(os.environ.get("PYTHONASYNCIODEBUG"))


def enable_asyncio_debug(
    slow_callback_duration: float = DEFAULT_SLOW_CALLBACK_DURATION,
) -> asyncio.AbstractEventLoop:
    """Turn on debug mode for the running loop.

    Callbacks blocking the loop longer than ``slow_callback_duration`` seconds
    are then reported through the ``asyncio`` logger.
    """
    if not isinstance(slow_callback_duration, (int, float)):
        raise TypeError("slow_callback_duration must be int or float")
    if slow_callback_duration <= 0:
        raise ValueError("slow_callback_duration must be greater than 0")

    loop = asyncio.get_running_loop()
    loop.set_debug(True)
    loop.slow_callback_duration = slow_callback_duration

    asyncio_logger = logging.getLogger("asyncio")
    if asyncio_logger.getEffectiveLevel() > logging.WARNING:
        asyncio_logger.setLevel(logging.WARNING)
    logger.info("asyncio debug mode on, slow callback: %ss", slow_callback_duration)
    return loop
