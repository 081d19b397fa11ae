from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ApiError(BaseModel):
    code: str
    message: str
    details: Any | None = None


class ErrorEnvelope(BaseModel):
    ok: bool = False
    error: ApiError


def fail(*, code: str, message: str, details: Any | None = None) -> ErrorEnvelope:
    return ErrorEnvelope(error=ApiError(code=code, message=message, details=details))


def status_to_code(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code == 405:
        return "method_not_allowed"
    if status_code == 422:
        return "validation_error"
    if 400 <= status_code < 500:
        return "client_error"
    return "server_error"
