"""Service listings table."""

from sqlalchemy import CheckConstraint, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from repairhub.db.base import Base, TimestampMixin


class ServiceRow(Base, TimestampMixin):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("application_count >= 0", name="ck_services_application_count"),
    )

    service_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    provider_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    provider_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    provider_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_name: Mapped[str] = mapped_column(String(200), nullable=False)
    service_area: Mapped[str | None] = mapped_column(String(200), nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    application_date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    # Denormalized: maintained only by the application lifecycle
    application_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
