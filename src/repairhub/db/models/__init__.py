"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from repairhub.db.models.service import ServiceRow
from repairhub.db.models.application import ApplicationRow

__all__ = ["ServiceRow", "ApplicationRow"]
