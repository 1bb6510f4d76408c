from __future__ import annotations

import math
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..middlewares import request_id_ctx_var


class InstrumentError(Exception):
    """Base class for failures raised by the store and the service."""


class InvalidIdentifier(InstrumentError):
    """The path identifier is not a well-formed integer."""

    def __init__(self, raw: object) -> None:
        super().__init__(f"invalid instrument identifier: {raw!r}")
        self.raw = raw


class InstrumentNotFound(InstrumentError):
    """No instrument matches the given identifier."""

    def __init__(self, instrument_id: int) -> None:
        super().__init__(f"instrument {instrument_id} not found")
        self.instrument_id = instrument_id


class StoreFailure(InstrumentError):
    """The persistence layer failed (constraint violation, lost connection...)."""


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the ``{code, message, details?, request_id?}`` body every error shares."""

    body: dict[str, Any] = {"code": code, "message": message}
    if details:
        body["details"] = details
    request_id = request_id_ctx_var.get()
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(body, status_code=status_code, headers=headers)


async def invalid_identifier_handler(request: Request, exc: InvalidIdentifier) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "invalid_identifier",
        "Identifier must be an integer",
        {"id": str(exc.raw)},
    )


async def not_found_handler(request: Request, exc: InstrumentNotFound) -> JSONResponse:
    return error_response(
        status.HTTP_404_NOT_FOUND,
        "not_found",
        "Not found",
        {"id": exc.instrument_id},
    )


async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
    # The store already logged the traceback; clients only get a generic indicator.
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "store_failure", "Internal server error")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    return error_response(
        exc.status_code,
        "http_error",
        detail if isinstance(detail, str) else "Error",
        detail if isinstance(detail, dict) else None,
        getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {key: _json_safe(value) for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]
    return error_response(422, "validation_error", "Validation failed", {"errors": errors})


def _json_safe(value: Any) -> Any:
    # Rejected bodies may carry inf/nan, which strict JSON cannot encode.
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidIdentifier, invalid_identifier_handler)
    app.add_exception_handler(InstrumentNotFound, not_found_handler)
    app.add_exception_handler(StoreFailure, store_failure_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
