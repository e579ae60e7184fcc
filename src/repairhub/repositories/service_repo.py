"""Service repository."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from repairhub.db.models.service import ServiceRow
from repairhub.models.enums import PriceSort
from repairhub.repositories.base import BaseRepository
from repairhub.services.refs import ServiceRef

logger = logging.getLogger(__name__)


@dataclass
class ServiceFilter:
    search: str | None = None
    provider_email: str | None = None
    only_with_applications: bool = False


class ServiceRepository(BaseRepository):
    pk_field = "service_id"

    def __init__(self, session: AsyncSession):
        super().__init__(session, ServiceRow)

    async def get(self, service_id: str) -> ServiceRow | None:
        return await self.get_by_id(service_id)

    async def resolve(self, ref: ServiceRef) -> ServiceRow | None:
        """Dereference an application's service reference, or None if dangling."""
        if not ref.is_well_formed:
            return None
        return await self.get(ref.raw)

    async def get_many(self, service_ids: list[str]) -> dict[str, ServiceRow]:
        if not service_ids:
            return {}
        stmt = (
            select(ServiceRow)
            .where(ServiceRow.service_id.in_(set(service_ids)))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return {row.service_id: row for row in result.scalars().all()}

    def _conditions(self, flt: ServiceFilter) -> list:
        conditions = []
        if flt.search:
            conditions.append(
                or_(
                    ServiceRow.service_name.icontains(flt.search, autoescape=True),
                    ServiceRow.service_area.icontains(flt.search, autoescape=True),
                )
            )
        if flt.provider_email:
            conditions.append(ServiceRow.provider_email == flt.provider_email)
        if flt.only_with_applications:
            conditions.append(ServiceRow.application_count > 0)
        return conditions

    async def find(
        self,
        flt: ServiceFilter,
        sort: PriceSort = PriceSort.NEWEST,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ServiceRow]:
        if sort is PriceSort.ASC:
            order = (ServiceRow.price.asc(), ServiceRow.created_at.asc(), ServiceRow.service_id.asc())
        else:
            order = (ServiceRow.created_at.desc(), ServiceRow.service_id.asc())
        stmt = (
            select(ServiceRow)
            .where(*self._conditions(flt))
            .order_by(*order)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, flt: ServiceFilter) -> int:
        stmt = select(func.count(ServiceRow.service_id)).where(*self._conditions(flt))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_for_provider(self, provider_email: str) -> list[ServiceRow]:
        return await self.list_by_field("provider_email", provider_email)

    async def most_applied(self, limit: int) -> list[ServiceRow]:
        stmt = (
            select(ServiceRow)
            .where(ServiceRow.application_count > 0)
            .order_by(ServiceRow.application_count.desc(), ServiceRow.created_at.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def adjust_application_count(self, ref: ServiceRef, delta: int) -> bool:
        """Atomically add ``delta`` to the service's application counter.

        Issued as a single UPDATE with a relative SET so concurrent callers
        never lose an update. Decrements never take the counter below zero.
        The listing's ``updated_at`` is left as is; only owner edits move it.
        Returns True if a service matched the reference.
        """
        if not ref.is_well_formed:
            return False
        conditions = [ServiceRow.service_id == ref.raw]
        if delta < 0:
            conditions.append(ServiceRow.application_count >= -delta)
        stmt = (
            update(ServiceRow)
            .where(*conditions)
            .values(
                application_count=ServiceRow.application_count + delta,
                updated_at=ServiceRow.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        matched = (result.rowcount or 0) > 0
        logger.debug("application_count %+d on %s (matched=%s)", delta, ref, matched)
        return matched
