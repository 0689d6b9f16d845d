"""Exception handlers that turn domain errors into the JSON error envelope.

Every error response has the same shape::

    {"success": false, "statusCode": 404, "message": "Order not found"}
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidDataError, ObjectNotFoundError, ValidationError

from storefront.errors import AccessError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "statusCode": status_code, "message": message},
    )


def first_message(messages, default="Bad Request") -> str:
    """Pick the first human-readable message out of a Protean error payload.

    Field-level framework messages ("is required") are prefixed with the
    field name; domain messages are already full sentences.
    """
    if isinstance(messages, str):
        return messages
    if not isinstance(messages, dict):
        return default

    for field, errors in messages.items():
        error = errors[0] if isinstance(errors, (list, tuple)) and errors else errors
        if not error:
            continue
        error = str(error)
        if field == "_entity" or error[0].isupper():
            return error
        return f"{field} {error}"
    return default


def _request_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Bad Request"
    error = errors[0]
    field = ".".join(str(part) for part in error.get("loc", ())[1:])
    return f"{field}: {error.get('msg')}" if field else error.get("msg", "Bad Request")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return error_response(400, first_message(exc.messages))

    @app.exception_handler(InvalidDataError)
    async def invalid_data_handler(request: Request, exc: InvalidDataError):
        return error_response(400, first_message(exc.messages))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(400, _request_validation_message(exc))

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        messages = exc.messages if hasattr(exc, "messages") else (exc.args[0] if exc.args else None)
        return error_response(404, first_message(messages, default="Not Found"))

    @app.exception_handler(AccessError)
    async def access_error_handler(request: Request, exc: AccessError):
        return error_response(exc.status_code, first_message(exc.messages))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_error",
            method=request.method,
            path=request.url.path,
            error=str(exc),
            exc_info=exc,
        )
        return error_response(500, "Internal Server Error")
