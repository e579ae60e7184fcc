"""Pydantic models for service applications."""

from pydantic import BaseModel, ConfigDict, Field

from repairhub.models.common import NormalizedEmail


class ApplicationCreate(BaseModel):
    # status / createdAt are server-owned and silently dropped
    model_config = ConfigDict(extra="ignore")

    service_id: str = Field(min_length=1, max_length=128)
    applicant_email: NormalizedEmail
    applicant_name: str | None = Field(None, max_length=200)
    instructions: str | None = None
    service_date: str | None = Field(None, max_length=64)


class StatusUpdate(BaseModel):
    # Plain str so an out-of-enum value reaches the lifecycle check
    status: str
