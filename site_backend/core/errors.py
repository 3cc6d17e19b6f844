# site_backend/core/errors.py

import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ConflictError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class AuthError(AppError):
    status_code = 400


class InvalidTokenError(AppError):
    status_code = 401


class StorageError(AppError):
    status_code = 500


async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, InvalidTokenError) else None
    content = {"message": exc.message}
    if isinstance(exc, ValidationError):
        content = {"errors": exc.errors}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=headers
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "form")]
        msg = err.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        errors.append({"field": ".".join(loc), "msg": msg})
    return await app_error_handler(request, ValidationError("Invalid request", errors=errors))


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


@contextmanager
def storage_errors(message: str):
    """
    Converts any unexpected failure inside the block into a logged
    StorageError carrying `message`. Domain errors pass through untouched.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as e:
        logger.exception("%s: %s", message, e)
        raise StorageError(message) from e
