"""
Application Error Taxonomy

Every failure a route can report maps to one of these exceptions. Each
carries the HTTP status it is rendered with; the exception handlers
installed by ``install_exception_handlers`` turn them into the standard
``ErrorResponse`` body.

    ValidationError      -> 400
    DuplicateError       -> 400
    AuthenticationError  -> 401
    AuthorizationError   -> 403
    NotFoundError        -> 404
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors rendered as a JSON error body."""

    status_code: int = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(AppError):
    """Bad or missing field, malformed email, short password, unknown role."""
    status_code = 400


class DuplicateError(AppError):
    """A record with the same unique key already exists."""
    status_code = 400


class InvalidCredentialsError(ValidationError):
    """Login failed. Deliberately the same for unknown email and wrong password."""

    def __init__(self):
        super().__init__("Incorrect email or password")


class AuthenticationError(AppError):
    """No valid session."""
    status_code = 401


class InvalidTokenError(AuthenticationError):
    """Session token has a bad signature, is malformed or has expired."""


class AuthorizationError(AppError):
    """Authenticated, but the role does not allow the operation."""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


# =============================================================================
# HANDLERS
# =============================================================================

def _error_body(error: str, detail: Optional[str] = None) -> dict:
    return {"success": False, "error": error, "detail": detail}


def install_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Register the taxonomy handlers plus a catch-all on ``app``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(
                f"{request.method} {request.url.path} -> {exc.status_code} {exc.message}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
            for err in exc.errors()
        )
        logger.info(f"{request.method} {request.url.path} -> 400 {problems}")
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation failed", problems),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")

        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Internal Server Error",
                str(exc) if debug else "An unexpected error occurred",
            ),
        )
