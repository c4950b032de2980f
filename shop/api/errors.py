# shop/api/errors.py
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shop.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(status_code: int, message) -> dict:
    """{"statusCode", "message", "error"} - jeden ksztalt dla kazdego bledu."""
    return {
        "statusCode": status_code,
        "message": message,
        "error": HTTPStatus(status_code).phrase,
    }


def _format_validation_error(err: dict) -> str:
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
    msg = err.get("msg", "Invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # wszystkie bledy pol naraz, a nie tylko pierwszy
    messages = [_format_validation_error(err) for err in exc.errors()]
    return JSONResponse(status_code=400, content=error_body(400, messages))


async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Storage error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=400,
        content=error_body(400, "The request could not be processed, please check the submitted data"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    # redis, broker i inne bledy infrastruktury tez dostaja koperte
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body(500, "Internal server error"))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
