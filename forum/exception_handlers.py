"""
Exception handlers for the forum HTTP surface

Error Response Format:
{
    "error": {
        "status_code": 404,
        "message": "Extension not found: signatures",
        "type": "Not Found",
        "details": {"extension": "signatures"},
        "path": "/api/v1/extensions/signatures"
    }
}

Listener errors are not ForumError instances and are deliberately left to
the framework's default handling.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from forum.exceptions import ForumError

logger = logging.getLogger(__name__)


def get_error_type(status_code: int) -> str:
    """Get a human-readable error type based on status code."""
    error_types = {
        400: "Bad Request",
        404: "Not Found",
        422: "Validation Error",
        500: "Internal Server Error",
    }
    return error_types.get(status_code, "Error")


def create_error_response(
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        status_code: HTTP status code
        message: Human-readable error message
        details: Additional error details
        path: Request path that caused the error
    """
    error_response: dict[str, Any] = {
        "error": {
            "status_code": status_code,
            "message": message,
            "type": get_error_type(status_code),
        }
    }

    if details:
        error_response["error"]["details"] = details

    if path:
        error_response["error"]["path"] = path

    return JSONResponse(status_code=status_code, content=error_response)


async def forum_exception_handler(request: Request, exc: ForumError) -> JSONResponse:
    """Render a ForumError as the standard error envelope."""
    logger.error(
        "ForumError: %s",
        exc.message,
        extra={"status_code": exc.status_code, "path": request.url.path},
    )

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        details=exc.details or None,
        path=request.url.path,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ForumError, forum_exception_handler)
