"""Service application repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repairhub.db.models.application import ApplicationRow
from repairhub.repositories.base import BaseRepository


class ApplicationRepository(BaseRepository):
    pk_field = "application_id"

    def __init__(self, session: AsyncSession):
        super().__init__(session, ApplicationRow)

    async def get(self, application_id: str) -> ApplicationRow | None:
        return await self.get_by_id(application_id)

    async def list_by_service(self, service_id: str) -> list[ApplicationRow]:
        stmt = (
            select(ApplicationRow)
            .where(ApplicationRow.service_id == service_id)
            .order_by(ApplicationRow.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_applicant(self, applicant_email: str) -> list[ApplicationRow]:
        stmt = (
            select(ApplicationRow)
            .where(ApplicationRow.applicant_email == applicant_email)
            .order_by(ApplicationRow.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_services(self, service_ids: list[str]) -> list[ApplicationRow]:
        if not service_ids:
            return []
        stmt = (
            select(ApplicationRow)
            .where(ApplicationRow.service_id.in_(set(service_ids)))
            .order_by(ApplicationRow.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
