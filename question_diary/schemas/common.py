"""
Error envelope shared by every router and exception handler.

`{code, message, details}`: `code` is the stable string clients branch on.
"""
from typing import Any, Optional
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """One entry of `details.errors` in a VALIDATION_ERROR response."""
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
