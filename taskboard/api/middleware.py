"""
Global middleware.
"""

import time

from fastapi import FastAPI, Request

from taskboard.utils.logger import setup_logger

logger = setup_logger("http")


def register_middleware(app: FastAPI) -> None:
    """Attach app-level middleware."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms"
        )
        return response
