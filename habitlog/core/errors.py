"""
Custom exception hierarchy for the habit tracker.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class HabitLogException(Exception):
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


class ValidationFailedError(HabitLogException):
    """Malformed or out-of-range input rejected before any write."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message=message, details=details)


class HabitNotFoundError(HabitLogException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "HABIT_NOT_FOUND"

    def __init__(self, habit_id: str):
        super().__init__(
            message=f"Habit {habit_id} not found.",
            details={"habit_id": habit_id},
        )


class InvestmentGoalNotFoundError(HabitLogException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "INVESTMENT_GOAL_NOT_FOUND"

    def __init__(self, goal_id: int):
        super().__init__(
            message=f"Investment goal {goal_id} not found.",
            details={"goal_id": goal_id},
        )


class MissingPrincipalError(HabitLogException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"

    def __init__(self, header: str):
        super().__init__(
            message=f"Missing caller identity header {header}.",
            details={"header": header},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def habitlog_exception_handler(request: Request, exc: HabitLogException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
