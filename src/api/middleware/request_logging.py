"""One structured log record per HTTP request."""

import logging
import time

from fastapi import Request, status

logger = logging.getLogger("api.access")


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    # Unhandled errors escape call_next; the outer handler answers them with a 500
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "durationMs": round((time.perf_counter() - started) * 1000, 2),
        }
        user_id = getattr(request.state, "user_id", None)
        if user_id:
            extra["userId"] = user_id

        logger.info("Request handled", extra=extra)
