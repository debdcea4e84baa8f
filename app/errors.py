# app/errors.py

"""Domain errors and the FastAPI handlers that turn them into responses.

Services raise one of the ``AppError`` subclasses below. Handlers never
build error responses by hand; ``register_error_handlers`` maps every
exception to either ``{"error": message}`` (known failures) or the
generic ``{"status", "statusCode", "message", "stack"?}`` body.
"""

import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, kind: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400


class ConflictError(AppError):
    status_code = 400


class AuthError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class InternalError(AppError):
    status_code = 500


# messages shared between services and tests
INVALID_CREDENTIALS = "Invalid email or password"
MISSING_TOKEN = "Access denied: token missing."
MALFORMED_AUTH = "Access denied: invalid or missing token format."
INVALID_TOKEN = "Invalid or expired token."
FORBIDDEN = "Access denied"
SLOT_TAKEN = "The requested time slot is already taken. Please choose another time."
INVALID_DATETIME = "The dateTime value is not a valid date and time."
INVALID_ID = "The id must be a valid integer."


def invalid_credentials() -> AuthError:
    return AuthError("InvalidCredentials", INVALID_CREDENTIALS, status_code=400)


def slot_taken() -> ConflictError:
    return ConflictError("SlotTaken", SLOT_TAKEN)


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning(
            "%s %s -> %s %s: %s",
            request.method, request.url.path, exc.status_code, exc.kind, exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("%s %s -> 400 malformed body", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)

    content = {
        "status": "error",
        "statusCode": 500,
        "message": "An unexpected error occurred",
    }
    # stack trace only outside production
    if settings.is_development:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
