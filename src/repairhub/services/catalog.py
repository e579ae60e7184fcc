"""Service catalog: listing, search, pagination and provider-side CRUD."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from repairhub.config import settings
from repairhub.db.base import utcnow
from repairhub.db.models.service import ServiceRow
from repairhub.errors.exceptions import NotFoundError, UnchangedError, ValidationError
from repairhub.models.common import normalize_email
from repairhub.models.enums import PriceSort
from repairhub.models.service import ServiceCreate, ServiceUpdate
from repairhub.repositories.service_repo import ServiceFilter, ServiceRepository
from repairhub.services.access import SessionIdentity, require_owner_or_admin
from repairhub.services.id_generator import SERVICE_PREFIX, generate_id, is_valid_id

logger = logging.getLogger(__name__)


def normalize_page(page: int | None) -> int:
    """Missing, zero or negative pages all mean the first page."""
    if page is None or page < 1:
        return 1
    if page > settings.max_page:
        raise ValidationError(
            f"page must not exceed {settings.max_page}", {"page": str(page)}
        )
    return page


def normalize_page_size(page_size: int | None) -> int | None:
    if page_size is None:
        return None
    if page_size < 1:
        raise ValidationError("limit must be a positive integer", {"limit": page_size})
    return min(page_size, settings.max_page_size)


def parse_sort(sort: str | None) -> PriceSort:
    """Only "asc" selects price order; any other value means newest first."""
    return PriceSort.ASC if sort == PriceSort.ASC else PriceSort.NEWEST


def validate_service_id(service_id: str) -> None:
    if not is_valid_id(service_id, SERVICE_PREFIX):
        raise ValidationError(f"Malformed service id '{service_id}'")


class ServiceCatalog:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.services = ServiceRepository(session)

    async def list_services(
        self,
        search: str | None = None,
        provider_email: str | None = None,
        only_with_applications: bool | None = None,
        page: int | None = None,
        page_size: int | None = None,
        sort: PriceSort = PriceSort.NEWEST,
    ) -> tuple[list[ServiceRow], int]:
        """Return one page of matching services and the total match count."""
        if only_with_applications is None:
            only_with_applications = bool(
                provider_email and settings.provider_dashboard_only_with_applications
            )
        flt = ServiceFilter(
            search=search.strip() if search and search.strip() else None,
            provider_email=normalize_email(provider_email) if provider_email else None,
            only_with_applications=only_with_applications,
        )
        page = normalize_page(page)
        page_size = normalize_page_size(page_size)
        offset = (page - 1) * page_size if page_size else 0

        rows = await self.services.find(flt, sort=sort, limit=page_size, offset=offset)
        total = await self.services.count(flt)
        return rows, total

    async def count_services(self, search: str | None = None) -> int:
        flt = ServiceFilter(search=search.strip() if search and search.strip() else None)
        return await self.services.count(flt)

    async def popular_services(self, limit: int | None = None) -> list[ServiceRow]:
        limit = normalize_page_size(limit) or settings.popular_services_limit
        return await self.services.most_applied(limit)

    async def get_service(self, service_id: str) -> ServiceRow:
        validate_service_id(service_id)
        row = await self.services.get(service_id)
        if row is None:
            raise NotFoundError("Service", service_id)
        return row

    async def create_service(self, body: ServiceCreate, identity: SessionIdentity) -> ServiceRow:
        require_owner_or_admin(identity, body.provider_email)
        row = await self.services.create(
            service_id=generate_id(SERVICE_PREFIX),
            provider_email=body.provider_email,
            provider_name=body.provider_name,
            provider_image=body.provider_image,
            service_name=body.service_name,
            service_area=body.service_area,
            price=body.price,
            description=body.description,
            application_date=body.application_date,
            application_count=0,
            created_at=utcnow(),
        )
        logger.info("Service %s created by %s", row.service_id, identity.email)
        return row

    async def update_service(
        self, service_id: str, patch: ServiceUpdate, identity: SessionIdentity
    ) -> ServiceRow:
        """Apply allow-listed fields.

        Raises ``UnchangedError`` when the service exists but no supplied
        field differs from what is stored.
        """
        row = await self.get_service(service_id)
        require_owner_or_admin(identity, row.provider_email)

        supplied = patch.model_dump(exclude_unset=True)
        changes = {
            field: value
            for field, value in supplied.items()
            if value is not None and getattr(row, field) != value
        }
        if not changes:
            raise UnchangedError("Service", service_id)

        await self.services.update(row, **changes)
        logger.info("Service %s updated fields=%s", service_id, sorted(changes))
        return row

    async def delete_service(self, service_id: str, identity: SessionIdentity) -> None:
        """Delete a listing. Applications referencing it are left dangling."""
        row = await self.get_service(service_id)
        require_owner_or_admin(identity, row.provider_email)
        await self.services.delete_by_id(service_id)
        logger.info("Service %s deleted by %s", service_id, identity.email)
