"""Pydantic models shared across the API."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field


def normalize_email(value: str) -> str:
    """Canonical form used for every stored and queried email."""
    return value.strip().lower()


# EmailStr only lowercases the domain; stored and queried addresses are fully folded
NormalizedEmail = Annotated[EmailStr, AfterValidator(normalize_email)]


class ErrorDetail(BaseModel):
    """Error detail in API responses."""

    model_config = ConfigDict(extra="forbid")

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str = Field(..., min_length=8, max_length=128)
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = "1.0"
    error: ErrorDetail
