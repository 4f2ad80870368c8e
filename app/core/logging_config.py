"""Process-wide logging setup and the request logging middleware."""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from app.core.config import Settings

logger = logging.getLogger("app.access")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Log method, path, status and processing time of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s - %s - %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
