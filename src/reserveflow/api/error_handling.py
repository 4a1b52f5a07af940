from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reserveflow.api.middleware.request_id import get_request_id
from reserveflow.application.use_cases.booking import (
    DateNotBookableError,
    SlotNotOfferedError,
    TableAssignmentConflictError,
)
from reserveflow.application.use_cases.config import ConfigNotFoundError, InvalidConfigError
from reserveflow.application.use_cases.manage_reservations import (
    ReservationChangedError,
    ReservationNotFoundError,
)
from reserveflow.application.use_cases.tables import TableInUseError, TableNotFoundError
from reserveflow.application.use_cases.update_reservation import ReservationNotEditableError
from reserveflow.domain.common.errors import ConfigurationIncompleteError, InvalidInputError
from reserveflow.domain.reservation.entities import ReservationTransitionError

logger = logging.getLogger(__name__)


ERROR_CODES: dict[type[Exception], tuple[int, str]] = {
    InvalidInputError: (400, "INVALID_INPUT"),
    InvalidConfigError: (400, "INVALID_CONFIG"),
    DateNotBookableError: (400, "DATE_NOT_BOOKABLE"),
    SlotNotOfferedError: (400, "SLOT_NOT_OFFERED"),
    ConfigNotFoundError: (404, "CONFIG_NOT_FOUND"),
    ReservationNotFoundError: (404, "RESERVATION_NOT_FOUND"),
    TableNotFoundError: (404, "TABLE_NOT_FOUND"),
    TableAssignmentConflictError: (409, "TABLE_ASSIGNMENT_CONFLICT"),
    ReservationNotEditableError: (409, "RESERVATION_NOT_EDITABLE"),
    ReservationChangedError: (409, "RESERVATION_CHANGED"),
    ReservationTransitionError: (409, "INVALID_RESERVATION_TRANSITION"),
    TableInUseError: (409, "TABLE_IN_USE"),
    ConfigurationIncompleteError: (500, "CONFIGURATION_INCOMPLETE"),
}

_HTTP_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def error_envelope(
    status_code: int, code: str, message: str, details: dict[str, Any] | None = None
) -> JSONResponse:
    error = {"code": code, "message": message, "details": details or {}}
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "requestId": get_request_id()},
    )


async def _domain_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    status_code, code = next(
        mapped for exc_cls, mapped in ERROR_CODES.items() if isinstance(exc, exc_cls)
    )
    if status_code >= 500:
        logger.error("request_failed", exc_info=exc)
    details = getattr(exc, "details", None)
    return error_envelope(
        status_code, code, str(exc), details if isinstance(details, dict) else None
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    return error_envelope(
        http_exc.status_code,
        _HTTP_CODES.get(http_exc.status_code, "HTTP_ERROR"),
        str(http_exc.detail) if http_exc.detail else "request failed",
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    errors = jsonable_encoder(cast(RequestValidationError, exc).errors())
    return error_envelope(400, "INVALID_REQUEST", "request validation failed", {"errors": errors})


def register_exception_handlers(app: FastAPI) -> None:
    for exc_cls in ERROR_CODES:
        app.add_exception_handler(exc_cls, _domain_exception_handler)

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
