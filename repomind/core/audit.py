"""
Audit Middleware - Request/response logging for monitoring.

Every API request is logged with its method, path, status, duration
and client address. Requests that address a stored codebase
(history lookups and session deletes) also carry the codebase id, and
upload/question traffic is tagged so it can be grepped out of the log.
"""
import re
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from repomind.core.logging_config import get_logger

logger = get_logger(__name__)

HEALTH_PATHS = ("/api/health", "/api/health/")

_CODEBASE_PATH = re.compile(r"^/api/history/(?P<codebase_id>[^/]+)/?$")

# Path prefix -> audit category
_CATEGORIES = (
    ("/api/upload/", "UPLOAD"),
    ("/api/question/", "QUESTION"),
    ("/api/history", "HISTORY"),
    ("/api/refactor", "REFACTOR"),
)


def codebase_id_from_path(path: str) -> Optional[str]:
    """Codebase id addressed by a history path, if any."""
    match = _CODEBASE_PATH.match(path)
    return match.group("codebase_id") if match else None


def request_category(path: str) -> str:
    for prefix, category in _CATEGORIES:
        if path.startswith(prefix):
            return category
    return "REQUEST"


class AuditMiddleware(BaseHTTPMiddleware):
    """Logs one line per request, at a level chosen by the status code."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"{request_category(path)} FAILED: {method} {path} "
                f"client={client_ip} duration={duration:.3f}s error={e}"
            )
            raise

        duration = time.time() - start_time
        self._log_request(method, path, response.status_code, duration, client_ip)
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response

    def _log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
        client_ip: str,
    ) -> None:
        if path in HEALTH_PATHS:
            logger.debug(f"HEALTH: status={status_code} duration={duration:.3f}s")
            return

        if status_code >= 500:
            log_fn = logger.error
        elif status_code >= 400:
            log_fn = logger.warning
        else:
            log_fn = logger.info

        codebase_id = codebase_id_from_path(path)
        codebase = f" codebase={codebase_id}" if codebase_id else ""

        log_fn(
            f"{request_category(path)}: {method} {path} "
            f"status={status_code} duration={duration:.3f}s "
            f"client={client_ip}{codebase}"
        )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers to all responses:
    X-Content-Type-Options, X-Frame-Options and Referrer-Policy.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
