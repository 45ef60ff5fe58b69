"""Error kinds shared by the route handlers and the collaborator clients.

Every failure a handler reports falls into one of three kinds:

* ``VALIDATION``: input rejected locally, before the backend is contacted.
* ``COLLABORATOR``: the auth service or data store answered with an error.
* ``UNEXPECTED``: anything else (bad JSON, network failures, bugs).

Handlers turn them into the ``{"error": message}`` envelope with
:func:`error_response`.
"""

import logging
from enum import Enum

from fastapi import status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    COLLABORATOR = "collaborator"
    UNEXPECTED = "unexpected"


class ApiError(Exception):
    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    kind = ErrorKind.VALIDATION


class NotAuthenticatedError(ValidationError):
    """Request is missing the session credential."""


class NotFoundError(ValidationError):
    """The addressed row does not exist."""


class ConflictError(ValidationError):
    """The row being created already exists."""


class CollaboratorError(ApiError):
    kind = ErrorKind.COLLABORATOR

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class UnexpectedError(ApiError):
    kind = ErrorKind.UNEXPECTED


def status_code_for(error: ApiError) -> int:
    if error.kind is ErrorKind.VALIDATION:
        if isinstance(error, NotAuthenticatedError):
            return status.HTTP_401_UNAUTHORIZED
        if isinstance(error, NotFoundError):
            return status.HTTP_404_NOT_FOUND
        if isinstance(error, ConflictError):
            return status.HTTP_409_CONFLICT
        return status.HTTP_400_BAD_REQUEST
    if error.kind is ErrorKind.COLLABORATOR:
        return status.HTTP_400_BAD_REQUEST
    if error.kind is ErrorKind.UNEXPECTED:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    raise AssertionError(f"Unhandled error kind: {error.kind!r}")


def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(error), content={"error": error.message})


def unexpected_error_response(exc: Exception, fallback: str) -> JSONResponse:
    """Log ``exc`` and report it as a 500 with its message, or ``fallback``."""
    logger.exception(fallback)
    return error_response(UnexpectedError(str(exc) or fallback))
