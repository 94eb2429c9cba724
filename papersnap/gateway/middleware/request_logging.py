"""
Request Logging Middleware

Logs each request with its status and duration. After a mutating request
it also checks whether the document store still has an unresolved write
failure; if so the response carries X-Storage-Warning so the client can
show a non-blocking "changes were not saved" notice.
"""
import logging
import time
from typing import Callable, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...core.logging_config import get_logger

logger = get_logger(__name__)

STORAGE_WARNING_HEADER = "X-Storage-Warning"
MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def _pending_save_error() -> Optional[str]:
    from ...routers import dependencies

    store = dependencies.document_store
    return store.last_save_error if store is not None else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status code and duration; the request id is added
    by the logging filter. Health and docs paths are not logged.
    """

    def __init__(self, app, skip_paths: List[str] = None):
        super().__init__(app)
        self.skip_paths = skip_paths or ["/health", "/docs", "/redoc", "/openapi.json"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if any(request.url.path.startswith(path) for path in self.skip_paths):
            return await call_next(request)

        method = request.method
        path = request.url.path
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(f"{method} {path} raised after {duration_ms:.1f}ms: {e}")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        level = logging_level_for(response.status_code)
        logger.log(level, f"{method} {path} -> {response.status_code} ({duration_ms:.1f}ms)")

        if method in MUTATING_METHODS:
            save_error = _pending_save_error()
            if save_error:
                logger.warning(f"{method} {path} applied in memory but storage is behind: {save_error}")
                response.headers[STORAGE_WARNING_HEADER] = "unsaved-changes"
        return response


def logging_level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO
