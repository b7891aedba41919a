"""
Audit Logging Middleware

One structured "api_request" record per call, tagged with the forecasting
resource it touched and a request id that is echoed back to the caller.
"""

import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from backend.config import get_settings

logger = logging.getLogger("audit")

REQUEST_ID_HEADER = "X-Request-ID"

# Paths to skip (health checks, static assets)
SKIP_PATHS = {"/health", "/health/ready", "/favicon.ico"}


def resource_for_path(path: str, prefix: str) -> str | None:
    """Return the API resource ("forecasts", "batches", ...) a path belongs to."""
    if not path.startswith(prefix + "/"):
        return None
    head = path[len(prefix) + 1 :].split("/", 1)[0]
    return head or None


def _log_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class AuditLogMiddleware(BaseHTTPMiddleware):
    """Logs each API request with its resource, status and latency."""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in SKIP_PATHS:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        start = time.monotonic()
        status_code = 500
        error: str | None = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as exc:
            error = str(exc)
            raise
        finally:
            record = {
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "resource": resource_for_path(path, get_settings().api_v1_prefix),
                "status": status_code,
                "latency_ms": round((time.monotonic() - start) * 1000, 2),
                "client_ip": request.client.host if request.client else "unknown",
            }
            if error:
                record["error"] = error

            logger.log(_log_level(status_code), "api_request", extra=record)
