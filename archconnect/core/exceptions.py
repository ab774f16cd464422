"""Domain exceptions and their FastAPI handlers.

Every error raised by the service layer carries a user-facing ``message``
(the text a client shows in its toast), a machine-readable ``code`` and the
HTTP status it maps to.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from archconnect.core.constants import GENERIC_ERROR_MESSAGE

logger = logging.getLogger(__name__)


class ArchConnectError(Exception):
    """Base exception for the ArchConnect API."""

    def __init__(
        self,
        message: str,
        code: str = "ARCHCONNECT_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "detail": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


class NotFoundError(ArchConnectError):
    """Raised when a user, architect or post does not exist."""

    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(
            message=f"The {resource} you're looking for doesn't exist",
            code=f"{resource.upper()}_NOT_FOUND",
            status_code=404,
            details={f"{resource}_id": resource_id},
        )


class AuthenticationError(ArchConnectError):
    """Raised when credentials or a bearer token are rejected."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message=message, code="AUTHENTICATION_FAILED", status_code=401)


class ForbiddenError(ArchConnectError):
    """Raised when the caller's role does not allow the operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="FORBIDDEN", status_code=403)


class ValidationError(ArchConnectError):
    """Raised when a request is well-formed but semantically invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="VALIDATION_ERROR", status_code=400)


class DataAccessError(ArchConnectError):
    """Raised when a call against the Supabase backend fails."""

    def __init__(self, action: str, error: str) -> None:
        super().__init__(
            message=f"Could not {action}",
            code="DATA_ACCESS_ERROR",
            status_code=500,
            details={"error": error},
        )
        self.action = action


class DesignGenerationError(ArchConnectError):
    """Raised when the image-generation edge function yields no image."""

    def __init__(self, message: str = "Failed to generate image") -> None:
        super().__init__(message=message, code="DESIGN_GENERATION_FAILED", status_code=502)


async def archconnect_exception_handler(
    request: Request,
    exc: ArchConnectError,
) -> JSONResponse:
    """Render an ``ArchConnectError`` as ``{"detail", "code"}`` JSON."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other exception with the generic fallback message."""
    logger.exception(
        "unhandled_exception",
        extra={"path": request.url.path, "error_message": str(exc)},
    )
    return JSONResponse(
        status_code=500,
        content={"detail": GENERIC_ERROR_MESSAGE, "code": "INTERNAL_ERROR"},
    )
