from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ApiError(BaseModel):
    code: str
    message: str
    details: Any | None = None


class ErrorResponse(BaseModel):
    ok: bool = False
    data: None = None
    error: ApiError


def fail(*, code: str, message: str, details: Any | None = None) -> ErrorResponse:
    return ErrorResponse(error=ApiError(code=code, message=message, details=details))


def status_to_code(status_code: int) -> str:
    if status_code == 401:
        return "unauthorized"
    if status_code == 403:
        return "forbidden"
    if status_code == 404:
        return "not_found"
    if status_code == 409:
        return "conflict"
    if status_code == 422:
        return "validation_error"
    if status_code == 502:
        return "bad_gateway"
    if 400 <= status_code < 500:
        return "client_error"
    return "server_error"
