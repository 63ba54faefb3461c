"""
blog_api.api.errors

HTTP error envelope and global exception handlers.

Responsibilities:
- Render every failure as JSON with a `message` field (plus `errors` for
  validation failures).
- Translate service error kinds into status codes.
- Mask infrastructure errors and log them server-side.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from blog_api.observability.logging import get_logger
from blog_api.services.results import ErrorKind, ServiceError

log = get_logger(__name__)

VALIDATION_ERRORS = "Validation errors"
INTERNAL_ERROR = "Internal server error"

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.reference_not_found: HTTP_400_BAD_REQUEST,
    ErrorKind.not_authorized: HTTP_401_UNAUTHORIZED,
    ErrorKind.conflict: HTTP_409_CONFLICT,
}


class ValidationFailed(HTTPException):
    """400 carrying the ordered list of `{field, message, value}` violations."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=VALIDATION_ERRORS)
        self.errors = errors


def service_error(error: ServiceError) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_KIND[error.kind], detail=error.message)


def not_found(resource: str, entity_id: str) -> HTTPException:
    return HTTPException(
        status_code=HTTP_404_NOT_FOUND, detail=f"{resource} with id {entity_id} not found"
    )


async def _validation_failed_handler(_request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, "errors": jsonable_encoder(exc.errors)},
    )


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Parsing failures the declared rules did not catch share the validation envelope.
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())[1:]) or "unknown",
            "message": err.get("msg"),
            "value": err.get("input"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"message": VALIDATION_ERRORS, "errors": jsonable_encoder(errors)},
    )


async def _http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    log.warning("integrity_error", error=str(exc.orig))
    return JSONResponse(
        status_code=HTTP_409_CONFLICT,
        content={"message": "Database constraint violation"},
    )


async def _store_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    log.error("store_error", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR},
    )


async def _unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled_exception", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(ValidationFailed, _validation_failed_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)


# --- Module Notes -----------------------------------------------------------
# The `Exception` handler runs in Starlette's ServerErrorMiddleware, which still
# re-raises after responding; store errors are handled one layer in and do not.
