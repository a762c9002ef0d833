"""
Custom exception hierarchy for the store outreach API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class OutreachException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(OutreachException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"

    @classmethod
    def missing(cls, fields: list[str]) -> "ValidationError":
        return cls(
            message=f"Missing required fields: {', '.join(fields)}.",
            details={"missing": fields},
        )


class AuthenticationError(OutreachException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "AUTHENTICATION_ERROR"


class AccountNotFoundError(AuthenticationError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, email: str):
        super().__init__(
            message=f"Account {email} not found.",
            details={"email": email},
        )


class AccountInactiveError(AuthenticationError):
    http_status = status.HTTP_403_FORBIDDEN
    code = "ACCOUNT_INACTIVE"

    def __init__(self, email: str):
        super().__init__(
            message=f"Account {email} is not active.",
            details={"email": email},
        )


class IncorrectPasswordError(AuthenticationError):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "INCORRECT_PASSWORD"

    def __init__(self):
        super().__init__(message="Incorrect password.")


class PermissionDeniedError(OutreachException):
    http_status = status.HTTP_403_FORBIDDEN
    code = "PERMISSION_DENIED"

    def __init__(self, pic_code: str, store_id: str):
        super().__init__(
            message=f"{pic_code} does not have permission to record actions for store {store_id}.",
            details={"pic_code": pic_code, "store_id": store_id},
        )


class NotFoundError(OutreachException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class GatewayError(OutreachException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "GATEWAY_ERROR"

    def __init__(self, message: str, table: str | None = None):
        super().__init__(
            message=message,
            details={"table": table} if table else {},
        )


class GatewayTimeoutError(GatewayError):
    code = "GATEWAY_TIMEOUT"


class GatewayUnavailableError(GatewayError):
    """The data source reset the connection; the client may retry."""
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "GATEWAY_UNAVAILABLE"


class WriteError(OutreachException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "WRITE_ERROR"

    def __init__(self, table: str, rows_appended: int):
        super().__init__(
            message=f"Failed to write data to {table}: {rows_appended} rows updated.",
            details={"table": table, "rows_appended": rows_appended},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def outreach_exception_handler(request: Request, exc: OutreachException) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 400 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
