"""
schemas/errors.py — Error envelope for every non-2xx response

Engine functions never raise on degraded data, so the only errors that
reach a client are payload validation failures, unknown routes, and an
unsupported dispatch mode on /api/dispatch/outbound.

Called by: main.py exception handlers
Depends on: pydantic
"""

from pydantic import BaseModel


class ValidationIssue(BaseModel):
    loc: list[str | int]
    msg: str
    type: str


class ErrorResponse(BaseModel):
    error: str
    status_code: int
    request_id: str = ""
    detail: list[ValidationIssue] | None = None
