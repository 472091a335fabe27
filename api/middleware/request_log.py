"""
Request logging middleware.

Logs every response with method, path, status and duration. Server errors
are logged at error level, client errors at warning, the rest at info.
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("api.requests")


def setup_request_logging(app: FastAPI) -> None:
    """Register the request logging middleware on an application."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        logger.debug(f"Incoming {request.method} request to {request.url.path}")

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        message = (
            f"Response {response.status_code} sent for "
            f"{request.method} {request.url.path} in {elapsed_ms:.0f}ms"
        )
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        return response
