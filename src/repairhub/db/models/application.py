"""Service applications table."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from repairhub.db.base import Base, TimestampMixin


class ApplicationRow(Base, TimestampMixin):
    __tablename__ = "service_applications"

    application_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # Bare reference, no foreign key: services may be deleted underneath it
    service_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    applicant_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    applicant_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="Pending")
