"""
Error Handling

Business exceptions raised by routers are converted to JSON error
responses by exception handlers; anything unexpected is caught by the
middleware and reported as a 500.
"""
import traceback

from fastapi import FastAPI, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ...api.exceptions import BUSINESS_EXCEPTIONS, handle_business_exception
from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger

logger = get_logger(__name__)


def _error_body(request: Request, detail, status_code: int) -> dict:
    return {
        "error": detail,
        "status_code": status_code,
        "path": request.url.path,
        "request_id": getattr(request.state, "request_id", None),
    }


async def business_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map a business exception to its HTTP status."""
    http_exception = handle_business_exception(exc)
    logger.warning(f"Business exception for {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=http_exception.status_code,
        content=_error_body(request, http_exception.detail, http_exception.status_code)
    )


def register_exception_handlers(app: FastAPI):
    for exc_class in BUSINESS_EXCEPTIONS:
        app.add_exception_handler(exc_class, business_exception_handler)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that turns unexpected exceptions into a 500 JSON response.

    In development the message and traceback are included; in
    production only a generic message is returned.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            is_development = ENVIRONMENT != "production"
            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)

            body = _error_body(
                request,
                str(e) if is_development else "Internal server error",
                status.HTTP_500_INTERNAL_SERVER_ERROR
            )
            if is_development:
                body["traceback"] = traceback.format_exc()
            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
