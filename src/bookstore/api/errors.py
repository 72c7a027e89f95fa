"""Exception handlers rendering errors as ``{"error": {"kind", "message"}}``."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from bookstore.exceptions import BookstoreError, ErrorKind

logger = structlog.get_logger(__name__)

STATUS_BY_KIND = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.EMPTY_CART: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORE_FAILURE: 503,
}


def _error_response(status_code: int, kind: str, message: str, details=None) -> JSONResponse:
    body = {"error": {"kind": kind, "message": message}}
    if details:
        body["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def bookstore_error_handler(request: Request, exc: BookstoreError) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    if status_code >= 500:
        logger.error("request_failed", path=request.url.path, kind=exc.kind.value, reason=exc.message)
    return _error_response(status_code, exc.kind.value, exc.message)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, ErrorKind.INVALID_INPUT.value, "Invalid input", details=exc.messages)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed path, query or body values are invalid input, not 422."""
    details = [{"loc": [str(part) for part in error["loc"]], "msg": error["msg"]} for error in exc.errors()]
    return _error_response(400, ErrorKind.INVALID_INPUT.value, "Invalid request", details=details)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookstoreError, bookstore_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
