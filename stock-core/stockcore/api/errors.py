# stockcore/api/errors.py
import asyncio
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockcore.core.exceptions import (
    ConflictError,
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    SameWarehouseError,
    StockCoreError,
)
from stockcore.core.logging_config import get_logger

from .response import error_response

logger = get_logger("api.errors")

# most specific class first
STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (InsufficientStockError, 409),
    (ConflictError, 409),
    (SameWarehouseError, 400),
    (InvalidInputError, 400),
)


def status_for(exc: StockCoreError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


def _details(exc: StockCoreError):
    details = {
        key: str(value)
        for key, value in vars(exc).items()
        if key != "message" and value is not None
    }
    return details or None


def _json(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = error_response(code, message, details).model_dump(mode="json")
    return JSONResponse(content=body, status_code=status_code)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StockCoreError)
    async def stock_core_exception_handler(request: Request, exc: StockCoreError):
        status_code = status_for(exc)
        logger.info(
            "request_rejected",
            extra={"path": request.url.path, "code": exc.code, "status_code": status_code},
        )
        return _json(status_code, exc.code, exc.message, _details(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _json(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _json(422, "VALIDATION_ERROR", "invalid request", {"errors": str(exc.errors())})

    @app.exception_handler(asyncio.TimeoutError)
    async def timeout_exception_handler(request: Request, exc: asyncio.TimeoutError):
        logger.warning("request_timed_out", extra={"path": request.url.path})
        return _json(504, "TIMEOUT", "operation timed out")

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_exception", extra={"path": request.url.path})
        return _json(500, "INTERNAL_ERROR", "internal server error")
