"""
app/api/errors.py

Request-level errors and the handlers that render them as `{"error": ...}`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DirectoryAPIError(Exception):
    """
    Base for errors that abort a request before any work is done.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(DirectoryAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class NoFileProvidedError(BadRequestError):
    default_message = "No file provided"


class UnauthorizedError(DirectoryAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(DirectoryAPIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class VerifierRoleRequiredError(ForbiddenError):
    default_message = "Forbidden - Verifier role required"


class NotFoundError(DirectoryAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(DirectoryAPIError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class UploadProcessingError(DirectoryAPIError):
    """
    Raised when the upload payload itself cannot be read.
    """

    default_message = "Upload failed"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _handle_directory_error(request: Request, exc: DirectoryAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed path=%s error=%s", request.url.path, exc.message)
    else:
        logger.warning(
            "Request rejected path=%s status=%s error=%s",
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return _error_response(exc.status_code, exc.message)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in {"query", "path", "body"})
    message = first.get("msg", "Invalid request")
    return _error_response(
        422,
        f"{location}: {message}" if location else message,
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error path=%s", request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal server error")


def register_error_handlers(application: FastAPI) -> None:
    """
    Install the `{"error": message}` handlers on ``application``.
    """

    application.add_exception_handler(DirectoryAPIError, _handle_directory_error)
    application.add_exception_handler(RequestValidationError, _handle_validation_error)
    application.add_exception_handler(Exception, _handle_unexpected_error)
