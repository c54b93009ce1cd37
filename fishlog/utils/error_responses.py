"""Builders for the structured error payloads returned by ``fishlog.main``."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from fishlog.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from fishlog.utils.request_context import current_request_id


def validation_details(
    errors: Iterable[Mapping[str, Any]],
) -> list[ValidationErrorDetail]:
    """Flatten pydantic error dicts into ``field``/``message``/``value`` rows."""

    return [
        ValidationErrorDetail(
            field=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in errors
    ]


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    status_code: int,
    path: str,
    detail: str | None = None,
    retry_after: int | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        request_id=current_request_id(),
        path=path,
        retry_after=retry_after,
    )


def build_validation_error_response(
    *,
    errors: list[ValidationErrorDetail],
    message: str,
    status_code: int,
    path: str,
) -> ValidationErrorResponse:
    """Wrap field errors; ``detail`` summarises how many fields failed."""

    return ValidationErrorResponse(
        message=message,
        detail=f"{len(errors)} validation error(s)",
        status_code=status_code,
        request_id=current_request_id(),
        path=path,
        errors=errors,
    )


__all__ = [
    "build_error_response",
    "build_validation_error_response",
    "validation_details",
]
