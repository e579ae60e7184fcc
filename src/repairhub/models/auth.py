"""Pydantic models for session issuance."""

from pydantic import BaseModel

from repairhub.models.common import NormalizedEmail


class SessionRequest(BaseModel):
    email: NormalizedEmail


class SessionResponse(BaseModel):
    success: bool = True
    expires_in: int
