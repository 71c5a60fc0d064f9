"""Graceful shutdown: let in-flight requests finish before the engine closes."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.pipeline_api.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts requests in flight. One instance per application, on ``app.state``.

    All updates happen on the event loop thread, so the counter needs no lock.
    """

    def __init__(self) -> None:
        self._in_flight = 0
        self._draining = False
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def is_shutting_down(self) -> bool:
        return self._draining

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        self._in_flight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.set()

    async def start_shutdown(self) -> None:
        """Mark the app as draining; /health starts answering 503."""
        self._draining = True
        logger.info("Draining requests", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until no request is in flight.

        Returns:
            False if requests were still running when ``timeout`` seconds elapsed
        """
        try:
            async with asyncio.timeout(timeout):
                await self._idle.wait()
        except TimeoutError:
            logger.warning("Drain timed out", timeout=timeout, in_flight=self._in_flight)
            return False
        return True
