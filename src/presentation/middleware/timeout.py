"""Request timeout middleware."""

import asyncio
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.presentation.api.error_handlers import error_response
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

PROCESS_TIME_HEADER = "X-Process-Time"


class TimeoutMiddleware(BaseHTTPMiddleware):
    """
    Abort requests that run longer than `timeout` seconds.

    A timed-out request gets a 504 in the standard error body; every
    response carries the elapsed seconds in X-Process-Time.
    """

    def __init__(self, app, timeout: float = 30.0):
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()

        try:
            response = await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            elapsed = time.perf_counter() - started
            logger.warning("Request %s timed out after %.2fs", request.url.path, elapsed)
            response = error_response(
                504,
                f"Request timeout after {self.timeout:g} seconds",
                request.url.path,
            )

        response.headers[PROCESS_TIME_HEADER] = f"{time.perf_counter() - started:.4f}"
        return response
