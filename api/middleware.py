"""
HTTP middleware for the contacts API: per-request access log.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Log one access line per request and expose its duration as ``X-Process-Time``."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{duration:.4f}"
        client = request.client.host if request.client else "-"
        logger.info(
            '%s "%s %s" %d %.1fms',
            client,
            request.method,
            request.url.path,
            response.status_code,
            duration * 1000,
        )
        return response
