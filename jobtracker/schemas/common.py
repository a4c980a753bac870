"""
Shared Pydantic building blocks.

The API speaks camelCase JSON; Python code keeps snake_case attribute names.
"""
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase aliases on the wire, snake_case accepted on input too."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(CamelModel):
    """Simple success/failure acknowledgement."""
    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")


class AvailabilityResponse(CamelModel):
    """Result of a username/email availability check."""
    available: bool = Field(..., description="True when the value is not taken yet")
    message: str = Field(..., description="Human-readable outcome")


class ErrorResponse(CamelModel):
    """Shape of every error body (declared on the routers via error_responses)."""
    timestamp: datetime
    status: int
    error: str
    message: str
    validation_errors: Optional[Dict[str, str]] = None


def error_responses(*status_codes: int) -> Dict[int, dict]:
    """OpenAPI ``responses`` entry declaring ErrorResponse for each status code."""
    return {code: {"model": ErrorResponse} for code in status_codes}
