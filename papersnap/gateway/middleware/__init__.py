"""
Gateway Middleware Module

Custom middleware for request/response handling, logging, and error handling.
"""
from .error_handler import ErrorHandlingMiddleware, register_exception_handlers
from .request_id import RequestIDMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "register_exception_handlers",
]
