"""Content-Type validation middleware.

Category writes are JSON only. A form-encoded or text body sent to an API
write endpoint is answered with 415 instead of a confusing 422.
"""

import logging
from typing import Callable

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# HTTP methods that typically have request bodies
METHODS_WITH_BODY = {"POST", "PUT", "PATCH"}

API_PREFIXES = ("/api/v1/", "/api/")


def is_json_content_type(content_type: str | None) -> bool:
    """Check if the content type indicates JSON (charset parameters allowed)."""
    if not content_type:
        return False
    return content_type.lower().strip().startswith("application/json")


def has_request_body(headers) -> bool:
    """A body is announced by a non-zero Content-Length or by chunked transfer."""
    if headers.get("content-length", "0").strip() not in ("", "0"):
        return True
    return "chunked" in headers.get("transfer-encoding", "").lower()


def should_validate_content_type(request: Request) -> bool:
    if request.method not in METHODS_WITH_BODY:
        return False
    return request.url.path.startswith(API_PREFIXES)


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """Reject non-JSON bodies on POST/PUT/PATCH API requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if should_validate_content_type(request):
            content_type = request.headers.get("content-type")
            has_body = has_request_body(request.headers)

            if has_body and not is_json_content_type(content_type):
                logger.warning(
                    f"Invalid Content-Type for {request.method} {request.url.path}: "
                    f"expected application/json, got {content_type}"
                )
                return JSONResponse(
                    status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                    content={
                        "detail": "Content-Type must be application/json for this endpoint",
                        "code": "UNSUPPORTED_MEDIA_TYPE",
                    },
                )

        return await call_next(request)
