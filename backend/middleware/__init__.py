"""Middleware package for request validation and logging."""

from .content_type import ContentTypeValidationMiddleware
from .logging import RequestLoggingMiddleware, configure_request_logging

__all__ = [
    "ContentTypeValidationMiddleware",
    "RequestLoggingMiddleware",
    "configure_request_logging",
]
