"""Structured request logging middleware for Starlette and FastAPI."""

from reqlog.config import RequestLogConfig
from reqlog.core.exceptions import InvalidLevelError
from reqlog.core.logging import build_logger
from reqlog.core.middleware import RequestLoggingMiddleware, attach_error

__all__ = [
    "InvalidLevelError",
    "RequestLogConfig",
    "RequestLoggingMiddleware",
    "attach_error",
    "build_logger",
]
