"""
Error bodies returned by the exception handlers in api.app.
"""

from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """Body for server-side failures; never carries store internals."""

    error: str
    detail: Optional[str] = None
    code: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    """Body for rejected payloads and query parameters, one entry per field."""

    error: str = "Validation failed"
    details: list[dict]
