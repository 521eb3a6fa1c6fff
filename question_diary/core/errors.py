"""
Custom exception hierarchy for the Question Diary API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

"No question assigned today" and "not answered yet" are NOT errors; they
are ordinary results of `resolve_today` and never appear here.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from question_diary.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class DiaryException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class DuplicateResponseError(DiaryException):
    http_status = status.HTTP_409_CONFLICT
    code = "DUPLICATE_RESPONSE"

    def __init__(self, day: date):
        super().__init__(
            message=f"A response for {day} already exists. Edit it instead of creating a new one.",
            details={"day": str(day)},
        )


class InvalidContentError(DiaryException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_CONTENT"

    def __init__(self):
        super().__init__(
            message="Response content must not be empty.",
            details={"field": "content"},
        )


class InvalidMoodRatingError(DiaryException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_MOOD_RATING"

    def __init__(self, value: Any, minimum: int, maximum: int):
        super().__init__(
            message=f"Mood rating must be an integer between {minimum} and {maximum}. Received {value!r}.",
            details={"field": "mood_rating", "min": minimum, "max": maximum, "received": value},
        )


class ResponseNotFoundError(DiaryException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "RESPONSE_NOT_FOUND"

    def __init__(self, response_id: int | None = None, day: date | None = None):
        details: dict[str, Any] = {}
        if response_id is not None:
            details["response_id"] = response_id
        if day is not None:
            details["day"] = str(day)
        super().__init__(message="Response not found.", details=details)


class QuestionNotFoundError(DiaryException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "QUESTION_NOT_FOUND"

    def __init__(self, question_id: str):
        super().__init__(
            message=f"Question {question_id!r} does not exist.",
            details={"question_id": question_id},
        )


class MissingUserContextError(DiaryException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "MISSING_USER_CONTEXT"

    def __init__(self):
        super().__init__(message="X-User-Id header is required.")


class ConstraintViolationError(DiaryException):
    """A write broke a store constraint other than one-response-per-day."""
    http_status = status.HTTP_409_CONFLICT
    code = "CONSTRAINT_VIOLATION"

    def __init__(self, operation: str):
        super().__init__(
            message="The write conflicts with existing data.",
            details={"operation": operation},
        )


class StoreError(DiaryException):
    """Collaborator failure. Reads may be retried by the caller; writes must not."""

    def __init__(self, message: str, operation: str | None = None):
        details: dict[str, Any] = {"retryable": "reads_only"}
        if operation:
            details["operation"] = operation
        super().__init__(message=message, details=details)


class StoreTimeoutError(StoreError):
    http_status = status.HTTP_504_GATEWAY_TIMEOUT
    code = "STORE_TIMEOUT"

    def __init__(self, operation: str | None = None):
        super().__init__(message="The data store did not answer in time.", operation=operation)


class StoreUnavailableError(StoreError):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, operation: str | None = None):
        super().__init__(message="The data store is unavailable.", operation=operation)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def diary_exception_handler(request: Request, exc: DiaryException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        ).model_dump()
        for error in exc.errors()
    ]
    body = ErrorResponse(
        code="VALIDATION_ERROR",
        message="Request validation failed.",
        details={"errors": field_errors},
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
