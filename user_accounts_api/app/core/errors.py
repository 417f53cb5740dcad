"""
Error taxonomy and the shared error boundary.

Request handlers raise :class:`AppError` through :func:`error_responder`
as soon as a check fails.  They never build error responses themselves:
:func:`register_exception_handlers` installs the FastAPI exception
handlers that turn an ``AppError`` (or any unexpected exception) into
the JSON error body::

    {"statusCode": 409, "error": "EMAIL_ALREADY_TAKEN_ERROR",
     "description": "Email already taken", "message": "..."}
"""

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Kinds of failure the API reports, with their wire representation."""

    UNPROCESSABLE_ENTITY = (422, "UNPROCESSABLE_ENTITY_ERROR", "Unprocessable entity")
    EMAIL_ALREADY_TAKEN = (409, "EMAIL_ALREADY_TAKEN_ERROR", "Email already taken")
    INVALID_PASSWORD = (403, "INVALID_PASSWORD_ERROR", "Invalid password")
    VALIDATION_ERROR = (400, "VALIDATION_ERROR", "Invalid request payload")
    SERVER = (500, "SERVER_ERROR", "Internal server error")

    def __init__(self, status_code: int, code: str, description: str) -> None:
        self.status_code = status_code
        self.code = code
        self.description = description


class AppError(Exception):
    """A typed, user‑facing failure carrying an :class:`ErrorType`."""

    def __init__(self, kind: ErrorType, message: str = "") -> None:
        super().__init__(message or kind.description)
        self.kind = kind
        self.message = message or kind.description

    def to_dict(self) -> dict:
        return {
            "statusCode": self.kind.status_code,
            "error": self.kind.code,
            "description": self.kind.description,
            "message": self.message,
        }


class RepositoryError(Exception):
    """Raised by a ``UserRepository`` when the underlying store fails."""


def error_responder(kind: ErrorType, message: str = "") -> AppError:
    """Build the error for ``kind``; callers ``raise`` the result."""
    return AppError(kind, message)


def _json_error(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.kind.status_code, content=error.to_dict())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "%s %s failed with %s: %s",
        request.method,
        request.url.path,
        exc.kind.name,
        exc.message,
    )
    return _json_error(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for err in exc.errors():
        # ``loc`` looks like ("body", "email"); drop the source part.
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        fields.append(".".join(loc) or "body")
    message = "Invalid or missing fields: " + ", ".join(sorted(set(fields)))
    return _json_error(error_responder(ErrorType.VALIDATION_ERROR, message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Starlette's ServerErrorMiddleware re-raises after this response is
    # sent and the ASGI server logs the traceback; only a summary here.
    logger.error(
        "Unhandled %s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc,
    )
    return _json_error(error_responder(ErrorType.SERVER, "Something went wrong"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error boundary to ``app``."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
