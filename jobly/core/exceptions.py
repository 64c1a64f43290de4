"""
Application exceptions and their HTTP mapping.

Every error raised by the query helpers, the query-parameter normalizer and
the repositories derives from JoblyError. A single FastAPI exception handler
turns them into {"detail": ...} responses with the matching status code.
"""

import logging
from typing import List, Union

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: Union[str, List[str], None] = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    """Client sent a malformed or unacceptable request."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class EmptyUpdateError(BadRequestError):
    """A partial update was requested with no fields."""

    default_message = "No data"


class BadRangeError(BadRequestError):
    """A minimum filter bound exceeds its maximum."""


class InvalidIdentifierError(BadRequestError):
    """A path identifier is not a number."""


class DecodeError(BadRequestError):
    """A text query parameter could not be percent-decoded."""


class RangeValidationError(BadRequestError):
    """A numeric query parameter is out of range or not an integer."""


class UnauthorizedError(JoblyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(JoblyError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(JoblyError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JoblyError handler on the application."""
    app.add_exception_handler(JoblyError, jobly_error_handler)
