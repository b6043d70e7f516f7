"""
Exception-to-response mapping for the API.

Every error body has the same shape, ``{"detail": str, "status_code": int}``;
body validation failures add an ``errors`` list. Request ids appear only in
server logs, never in responses, and 500s never echo the underlying error.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from zencure.exceptions import ServiceError
from zencure.logging import get_logger

logger = get_logger("backend.errors")

STORE_UNAVAILABLE = "Service temporarily unavailable"
INTERNAL_ERROR = "Internal server error"


def _request_id(request: Request) -> str:
    # The catch-all handler runs outside the middleware stack, after the log
    # context is unbound, so read the id from request state
    return getattr(request.state, "request_id", "-")


def error_response(status_code: int, detail: str, headers=None, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "status_code": status_code, **extra},
        headers=headers,
    )


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning(
        "service_error",
        error_type=type(exc).__name__,
        detail=exc.detail,
        status_code=exc.status_code,
        path=request.url.path,
        request_id=_request_id(request),
    )
    return error_response(exc.status_code, exc.detail)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning(
        "http_exception",
        detail=exc.detail,
        status_code=exc.status_code,
        path=request.url.path,
        request_id=_request_id(request),
    )
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "validation_error",
        errors=errors,
        path=request.url.path,
        request_id=_request_id(request),
    )
    return error_response(422, "Validation error", errors=errors)


async def handle_store_unavailable(request: Request, exc: OperationalError) -> JSONResponse:
    logger.error(
        "store_unavailable",
        error=str(exc.orig),
        path=request.url.path,
        request_id=_request_id(request),
    )
    return error_response(503, STORE_UNAVAILABLE)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        path=request.url.path,
        request_id=_request_id(request),
    )
    return error_response(500, INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, handle_service_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(OperationalError, handle_store_unavailable)
    app.add_exception_handler(Exception, handle_unexpected)
