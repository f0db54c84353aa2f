"""Schemas shared by every v1 resource."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Acknowledgement for operations with nothing else to return."""

    message: str
