"""
Error taxonomy for the booking core and its HTTP mapping.

Services raise these; routers never build error responses by hand.
Storage exceptions are translated in the service layer, so nothing
from the database driver reaches a client.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BookingError(Exception):
    status_code = 500
    code = "error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(BookingError):
    """Bad input shape or content. Raised before any storage call."""
    status_code = 400
    code = "validation_error"


class AuthenticationError(BookingError):
    status_code = 401
    code = "unauthenticated"


class AuthorizationError(BookingError):
    """Non-privileged actor attempting an administrative operation."""
    status_code = 403
    code = "forbidden"


class NotFoundError(BookingError):
    status_code = 404
    code = "not_found"


class ConflictError(BookingError):
    """Natural-key or slot-exclusivity violation."""
    status_code = 409
    code = "conflict"


class StorageError(BookingError):
    """Opaque downstream failure. Safe to retry for idempotent steps."""
    status_code = 500
    code = "storage_error"


def _body(message: str, code: str, details: Optional[Any] = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message, "code": code}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body


def pydantic_error_details(errors: list[dict]) -> list[dict]:
    # ctx may hold exception instances, which are not JSON serialisable
    return [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "message": err.get("msg", ""),
        }
        for err in errors
    ]


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            _body(exc.message, exc.code, exc.details),
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            _body(
                "Validation failed",
                ValidationError.code,
                pydantic_error_details(exc.errors()),
            ),
            status_code=ValidationError.status_code,
        )
