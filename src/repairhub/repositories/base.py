"""Base repository with common CRUD operations."""

from typing import Any, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from repairhub.db.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository:
    """Generic async repository for SQLAlchemy models."""

    pk_field: str = ""

    def __init__(self, session: AsyncSession, model_class: type[T]):
        self.session = session
        self.model_class = model_class

    @property
    def _pk(self):
        return getattr(self.model_class, self.pk_field)

    async def get_by_id(self, pk_value: str) -> T | None:
        """Get a single record by primary key."""
        stmt = (
            select(self.model_class)
            .where(self._pk == pk_value)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> T:
        """Create and persist a new record."""
        row = self.model_class(**kwargs)
        self.session.add(row)
        await self.session.flush()
        return row

    async def update(self, row: T, **kwargs: Any) -> T:
        """Update an existing record."""
        for key, value in kwargs.items():
            setattr(row, key, value)
        await self.session.flush()
        return row

    async def update_where(self, pk_value: str, *conditions, **values: Any) -> int:
        """Set fields on the record matching ``pk_value`` and ``conditions``.

        Returns the number of matched rows.
        """
        stmt = (
            update(self.model_class)
            .where(self._pk == pk_value, *conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def delete_by_id(self, pk_value: str) -> int:
        """Delete the record with ``pk_value``; returns the number of deleted rows."""
        stmt = delete(self.model_class).where(self._pk == pk_value)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def list_by_field(self, field: str, value: Any) -> list[T]:
        """List records matching a field value."""
        stmt = select(self.model_class).where(
            getattr(self.model_class, field) == value
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
