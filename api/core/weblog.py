"""
Request logging middleware.
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from fastapi import Request, Response

logger = logging.getLogger("weblog")


def format_duration(duration_ns: int) -> str:
    if duration_ns > 2_000_000:
        return f"{duration_ns // 1_000_000} ms"
    if duration_ns > 1_000:
        return f"{duration_ns // 1_000} μs"
    return f"{duration_ns} ns"


async def weblog(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    start = time.perf_counter_ns()
    response = await call_next(request)
    duration = time.perf_counter_ns() - start

    logger.info("[%s] %s '%s'", format_duration(duration), response.status_code, request.url.path)
    return response
