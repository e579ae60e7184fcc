"""Pydantic models for service listings."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from repairhub.models.common import NormalizedEmail


# ── Request models ─────────────────────────────────────────────────────────────

class ServiceCreate(BaseModel):
    # createdAt / applicationCount are server-owned and silently dropped
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    provider_email: NormalizedEmail = Field(alias="providerEmail")
    provider_name: str | None = Field(None, alias="providerName", max_length=200)
    provider_image: str | None = Field(None, alias="providerImage")
    service_name: str = Field(alias="serviceName", min_length=1, max_length=200)
    service_area: str | None = Field(None, alias="serviceArea", max_length=200)
    price: float = Field(0.0, ge=0)
    description: str | None = None
    application_date: str | None = Field(None, alias="applicationDate", max_length=64)


class ServiceUpdate(BaseModel):
    """Allow-listed mutable fields. Anything else in the body is ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    service_name: str | None = Field(None, alias="serviceName", min_length=1, max_length=200)
    service_area: str | None = Field(None, alias="serviceArea", max_length=200)
    price: float | None = Field(None, ge=0)
    description: str | None = None
    application_date: str | None = Field(None, alias="applicationDate", max_length=64)
    provider_image: str | None = Field(None, alias="providerImage")


# ── Response models ────────────────────────────────────────────────────────────

class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(validation_alias="service_id")
    provider_email: str = Field(serialization_alias="providerEmail")
    provider_name: str | None = Field(serialization_alias="providerName")
    provider_image: str | None = Field(serialization_alias="providerImage")
    service_name: str = Field(serialization_alias="serviceName")
    service_area: str | None = Field(serialization_alias="serviceArea")
    price: float
    description: str | None
    application_date: str | None = Field(serialization_alias="applicationDate")
    application_count: int = Field(serialization_alias="applicationCount")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime | None = Field(serialization_alias="updatedAt")

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ServicePage(BaseModel):
    items: list[dict]
    total: int
    page: int
    limit: int | None
