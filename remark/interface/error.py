"""Interface layer errors and their HTTP mapping.

Domain errors propagate out of the use cases unchanged and are turned
into ``{"error": {"code", "message"}}`` responses here.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from remark.domain.error import (
    AlreadyReportedError,
    DepthExceededError,
    DomainError,
    ForbiddenError,
    InvalidActionError,
    InvalidRelationError,
    NotFoundError,
    ValidationError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationError(InterfaceError):
    """Missing, invalid or expired access token."""

    pass


# Checked in order, so subclasses must come before their bases
DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int, str]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (InvalidRelationError, status.HTTP_400_BAD_REQUEST, "INVALID_RELATION"),
    (DepthExceededError, status.HTTP_400_BAD_REQUEST, "DEPTH_EXCEEDED"),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, "FORBIDDEN"),
    (AlreadyReportedError, status.HTTP_409_CONFLICT, "ALREADY_REPORTED"),
    (InvalidActionError, status.HTTP_400_BAD_REQUEST, "INVALID_ACTION"),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT, "VALIDATION_ERROR"),
]


def error_body(code: str, message: str) -> dict:
    """Build the JSON error envelope."""
    return {"error": {"code": code, "message": message}}


def status_for(exc: DomainError) -> tuple[int, str]:
    """Look up the HTTP status and error code for a domain error."""
    for error_type, status_code, code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code, code
    return status.HTTP_400_BAD_REQUEST, "DOMAIN_ERROR"


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers mapping domain and interface errors to responses."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(
        request: Request,
        exc: DomainError,
    ) -> JSONResponse:
        """Handle domain errors raised by the use cases."""
        status_code, code = status_for(exc)
        logfire.info(
            "Request rejected",
            path=request.url.path,
            code=code,
            status_code=status_code,
            error=str(exc),
        )
        return JSONResponse(status_code=status_code, content=error_body(code, str(exc)))

    @app.exception_handler(AuthenticationError)
    async def authentication_exception_handler(
        request: Request,
        exc: AuthenticationError,
    ) -> JSONResponse:
        """Handle missing or invalid credentials."""
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=error_body("AUTHENTICATION_REQUIRED", str(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request body/query validation errors."""
        messages = [
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            content=error_body("VALIDATION_ERROR", "; ".join(messages)),
        )
