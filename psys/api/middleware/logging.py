"""
Request/response logging middleware
"""
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from psys.utils.config import settings
from psys.utils.logger import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Probes hit these often; logged at debug level only
QUIET_PATHS = ("/", f"{settings.API_V1_PREFIX}/health")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with a correlation id and elapsed milliseconds"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        path = request.url.path
        log = logger.debug if path in QUIET_PATHS else logger.info

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        log(f"{request.method} {path} -> {response.status_code} ({elapsed_ms} ms)", extra={
            "request_id": request_id,
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "elapsed_ms": elapsed_ms,
            "client_host": request.client.host if request.client else None
        })

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time-Ms"] = str(elapsed_ms)
        return response
