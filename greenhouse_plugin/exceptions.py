"""
Custom exception classes and error handling.

This module provides custom exceptions and utilities for consistent
error handling across the plugin.
"""
import logging
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GreenhousePluginException(Exception):
    """Base exception for all plugin-specific errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(GreenhousePluginException):
    """Raised when a required setting (URL token, API key) is missing."""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, {"setting": setting} if setting else None)
        self.setting = setting


class ValidationError(GreenhousePluginException):
    """Raised when request input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)
        self.field = field


class JobValidationError(ValidationError):
    """Raised when a job identifier cannot be confirmed against the Greenhouse board."""

    def __init__(self, message: str, job_id: int, upstream_status: Optional[int] = None):
        details = {"jobId": job_id}
        if upstream_status is not None:
            details["upstreamStatus"] = upstream_status
        super().__init__(message, field="jobId", details=details)
        self.job_id = job_id
        self.upstream_status = upstream_status


class GreenhouseAPIError(GreenhousePluginException):
    """
    Raised when the Greenhouse API answers with a non-2xx status.

    The upstream status is kept so handlers can tell "not found" (404) from
    "unauthorized" (401) from anything else, and is reused as the response
    status when it is an HTTP error code.
    """

    def __init__(self, upstream_status: int, reason: str = "", body: Any = None, url: str = ""):
        message = f"Greenhouse API error: {upstream_status} - {reason}".rstrip(" -")
        status_code = upstream_status if 400 <= upstream_status < 600 else status.HTTP_502_BAD_GATEWAY
        super().__init__(message, status_code, {"status": upstream_status, "body": body})
        self.upstream_status = upstream_status
        self.reason = reason
        self.body = body
        self.url = url

    @property
    def is_not_found(self) -> bool:
        return self.upstream_status == status.HTTP_404_NOT_FOUND

    @property
    def is_unauthorized(self) -> bool:
        return self.upstream_status == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Exception Handlers
# =============================================================================

async def plugin_exception_handler(request: Request, exc: GreenhousePluginException) -> JSONResponse:
    """Handle GreenhousePluginException instances."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": "Something went wrong talking to Greenhouse. Please try again later."
        }
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Call this during app initialization:
        from greenhouse_plugin.exceptions import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(GreenhousePluginException, plugin_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
