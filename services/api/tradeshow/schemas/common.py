"""Common schemas used across the API."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope.

    Format: { "success": false, "error": str }
    """

    success: bool = False
    error: str
