"""Translation of validation failures into HTTP problem responses."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from http import HTTPStatus
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from users_backend.api.models import ValidationProblem

_MALFORMED_SOURCES = {"path", "query", "header", "cookie"}


def field_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries by dotted field location."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        grouped.setdefault(".".join(loc) or "body", []).append(error["msg"])
    return grouped


def problem_response(
    status_code: int, errors: Mapping[str, list[str]] | None = None
) -> JSONResponse:
    """Return a :class:`ValidationProblem` body with *status_code*."""
    title = (
        "One or more validation errors occurred."
        if status_code == HTTPStatus.UNPROCESSABLE_ENTITY
        else "The request is malformed."
    )
    problem = ValidationProblem(title=title, status=status_code, errors=dict(errors or {}))
    return JSONResponse(status_code=status_code, content=problem.model_dump())


def _is_malformed(error: Mapping[str, Any]) -> bool:
    loc = tuple(error.get("loc", ()))
    if error.get("type") == "json_invalid":
        return True
    if loc and loc[0] in _MALFORMED_SOURCES:
        return True
    # Errors on the body as a whole: missing, null or not an object/array
    return loc == ("body",)


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report unparseable requests as 400 and field rule violations as 422."""
    errors = exc.errors()
    if any(_is_malformed(error) for error in errors):
        return problem_response(status.HTTP_400_BAD_REQUEST, field_errors(errors))
    return problem_response(HTTPStatus.UNPROCESSABLE_ENTITY, field_errors(errors))


__all__ = [
    "field_errors",
    "problem_response",
    "request_validation_exception_handler",
]
