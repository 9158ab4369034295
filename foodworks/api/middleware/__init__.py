"""API middleware."""

from foodworks.api.middleware.error_handler import ErrorHandlerMiddleware
from foodworks.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
