# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Two response shapes are produced:
# - Client errors (4xx): JSON body with an "error" key plus code/suggestion
# - Server errors (5xx): the raw error message as plain text
#
# Handlers (core/services) raise these; app/main.py converts them.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)


class NutriFitException(Exception):
    """
    Base exception for the NutriFit API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "NUTRIFIT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions (400)
# =============================================================================

class MissingParametersError(NutriFitException):
    """Raised when a required request field is absent or empty."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message="Missing required parameters",
            code="MISSING_PARAMETERS",
            status_code=400,
            suggestion=f"Provide non-empty values for: {', '.join(missing)}",
            details={"missing": missing},
        )


# =============================================================================
# Auth Exceptions (401 / 403)
# =============================================================================

class UnauthorizedError(NutriFitException):
    """Raised when the caller has no valid session."""

    def __init__(self, reason: str | None = None):
        super().__init__(
            message="Unauthorized",
            code="UNAUTHORIZED",
            status_code=401,
            suggestion="Send a valid bearer token in the Authorization header",
            details={"reason": reason} if reason else None,
        )


class ForbiddenError(NutriFitException):
    """Raised when the caller is authenticated but not allowed to act."""

    def __init__(self, reason: str | None = None):
        super().__init__(
            message="Forbidden",
            code="FORBIDDEN",
            status_code=403,
            details={"reason": reason} if reason else None,
        )


# =============================================================================
# Body Exceptions (500, plain text)
# =============================================================================
# Only absent or empty fields are a 400. A body that is not JSON, or whose
# values have the wrong type or date format, fails like any other handler
# error.

class MalformedRequestError(NutriFitException):
    """Raised when the request body cannot be parsed into the expected fields."""

    def __init__(self, errors: list[dict[str, Any]]):
        problems = "; ".join(
            f"{error['field']}: {error['msg']}" if error["field"] else error["msg"]
            for error in errors
        )
        super().__init__(
            message=f"Invalid request body: {problems or 'could not be parsed'}",
            code="MALFORMED_REQUEST",
            status_code=500,
            details={"errors": errors},
        )


# =============================================================================
# Lookup Exceptions (500, plain text)
# =============================================================================
# Lookup misses are reported as server errors, not 404s.

class NotFoundError(NutriFitException):
    """Base class for rows that a handler needs but cannot find."""

    def __init__(self, message: str, code: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status_code=500, details=details)


class DriverLocationNotFoundError(NotFoundError):
    def __init__(self, driver_id: Any):
        super().__init__(
            "Driver location not found.",
            "DRIVER_LOCATION_NOT_FOUND",
            {"driver_id": str(driver_id)},
        )


class AddressNotFoundError(NotFoundError):
    def __init__(self, address_id: Any):
        super().__init__(
            "Client address not found.",
            "ADDRESS_NOT_FOUND",
            {"address_id": str(address_id)},
        )


class SubscriptionNotFoundError(NotFoundError):
    def __init__(self, subscription_id: Any):
        super().__init__(
            "Subscription not found.",
            "SUBSCRIPTION_NOT_FOUND",
            {"subscription_id": str(subscription_id)},
        )


class MenuTemplateNotFoundError(NotFoundError):
    def __init__(self, week_no: int, dow: int, reason: str = "no matching row"):
        super().__init__(
            f"Failed to find menu template for week {week_no}, DOW {dow}: {reason}",
            "MENU_TEMPLATE_NOT_FOUND",
            {"week_no": week_no, "dow": dow},
        )


class InvalidLocationError(NutriFitException):
    """Raised when a driver or address row has missing coordinates."""

    def __init__(self):
        super().__init__(
            message="Invalid location data for driver or client.",
            code="INVALID_LOCATION",
            status_code=500,
        )


class BackendError(NutriFitException):
    """Raised when a Supabase query or mutation fails."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(
            message=message,
            code="BACKEND_ERROR",
            status_code=500,
            details={"operation": operation} if operation else None,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def nutrifit_exception_handler(
    request: Request,
    exc: NutriFitException
) -> JSONResponse | PlainTextResponse:
    """
    Convert NutriFitException to a response.

    Client errors get the structured JSON body; server errors return
    the message verbatim as plain text.
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> PlainTextResponse:
    """
    Handle Pydantic validation errors.

    Reported as a plain-text 500, like any other failure after the
    missing-parameter check. The leading "body" location is dropped.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:] if isinstance(part, str)),
            "msg": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return await nutrifit_exception_handler(request, MalformedRequestError(errors))


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> PlainTextResponse:
    """Report anything unexpected as a 500 carrying the raw message."""
    logger.exception(f"Unexpected error: {exc}")
    return PlainTextResponse(str(exc), status_code=500)
