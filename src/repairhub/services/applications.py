"""Application lifecycle: creation, enrichment, status transitions, deletion.

This module owns ``ServiceRow.application_count``. Every application insert
is paired with an atomic increment of the referenced service's counter and
every delete with an atomic (floored) decrement, each in the same
transaction as the write it accompanies. Service references are bare
strings and may dangle; enrichment drops the service fields for those
instead of failing.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from repairhub.db.base import utcnow
from repairhub.db.models.application import ApplicationRow
from repairhub.db.models.service import ServiceRow
from repairhub.errors.exceptions import NotFoundError, ValidationError
from repairhub.models.application import ApplicationCreate
from repairhub.models.common import normalize_email
from repairhub.models.enums import ApplicationStatus
from repairhub.repositories.application_repo import ApplicationRepository
from repairhub.repositories.service_repo import ServiceRepository
from repairhub.services.access import (
    SessionIdentity,
    require_owner_or_admin,
    require_same_identity,
)
from repairhub.services.id_generator import APPLICATION_PREFIX, generate_id, is_valid_id
from repairhub.services.refs import ServiceRef

logger = logging.getLogger(__name__)


@dataclass
class CreatedApplication:
    application: ApplicationRow
    counted: bool


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def application_to_dict(app: ApplicationRow) -> dict:
    return {
        "id": app.application_id,
        "service_id": app.service_id,
        "applicant_email": app.applicant_email,
        "applicant_name": app.applicant_name,
        "instructions": app.instructions,
        "service_date": app.service_date,
        "status": app.status,
        "createdAt": _iso(app.created_at),
        "updatedAt": _iso(app.updated_at),
    }


def enrich_for_applicant(app: ApplicationRow, service: ServiceRow | None) -> dict:
    """Attach a read-time snapshot of the service for the applicant's view.

    The service's ``createdAt`` replaces the application's here.
    """
    data = application_to_dict(app)
    if service is not None:
        data.update(
            serviceName=service.service_name,
            providerImage=service.provider_image,
            serviceArea=service.service_area,
            providerName=service.provider_name,
            price=service.price,
            createdAt=_iso(service.created_at),
        )
    return data


def enrich_for_provider(app: ApplicationRow, service: ServiceRow | None) -> dict:
    data = application_to_dict(app)
    if service is not None:
        data.update(
            serviceName=service.service_name,
            price=service.price,
            location=service.service_area,
            createdAt=_iso(app.created_at) or _iso(service.created_at),
        )
    return data


def parse_status(value: str) -> ApplicationStatus:
    """Any of the three states may move to any other; only the enum is checked."""
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid status '{value}'",
            {"allowed": [s.value for s in ApplicationStatus]},
        ) from None


def validate_application_id(application_id: str) -> None:
    if not is_valid_id(application_id, APPLICATION_PREFIX):
        raise ValidationError(f"Malformed application id '{application_id}'")


class ApplicationLifecycle:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.applications = ApplicationRepository(session)
        self.services = ServiceRepository(session)

    async def _services_for(self, apps: list[ApplicationRow]) -> dict[str, ServiceRow]:
        refs = {ServiceRef(app.service_id) for app in apps}
        return await self.services.get_many([r.raw for r in refs if r.is_well_formed])

    async def create_application(
        self, body: ApplicationCreate, identity: SessionIdentity
    ) -> CreatedApplication:
        """Store a Pending application and count it against its service.

        The application is stored even when ``service_id`` does not resolve;
        in that case no counter changes and ``counted`` is False.
        """
        require_owner_or_admin(identity, body.applicant_email)

        app = await self.applications.create(
            application_id=generate_id(APPLICATION_PREFIX),
            service_id=body.service_id,
            applicant_email=body.applicant_email,
            applicant_name=body.applicant_name,
            instructions=body.instructions,
            service_date=body.service_date,
            status=ApplicationStatus.PENDING.value,
            created_at=utcnow(),
        )
        counted = await self.services.adjust_application_count(ServiceRef(app.service_id), +1)
        if not counted:
            logger.info(
                "Application %s references unknown service %s; counter untouched",
                app.application_id,
                app.service_id,
            )
        return CreatedApplication(application=app, counted=counted)

    async def list_by_service(self, service_id: str) -> list[dict]:
        apps = await self.applications.list_by_service(service_id)
        return [application_to_dict(app) for app in apps]

    async def list_by_applicant(self, email: str, identity: SessionIdentity) -> list[dict]:
        require_same_identity(identity, email)
        apps = await self.applications.list_by_applicant(normalize_email(email))
        services = await self._services_for(apps)
        return [enrich_for_applicant(app, services.get(app.service_id)) for app in apps]

    async def list_for_provider(self, email: str, identity: SessionIdentity) -> list[dict]:
        require_same_identity(identity, email)
        rows = await self.services.list_for_provider(normalize_email(email))
        owned = {row.service_id: row for row in rows}
        apps = await self.applications.list_for_services(list(owned))
        return [enrich_for_provider(app, owned.get(app.service_id)) for app in apps]

    async def update_status(
        self, application_id: str, new_status: str, identity: SessionIdentity
    ) -> ApplicationRow:
        """Move an application to ``new_status``.

        A missing application and one already in ``new_status`` are reported
        the same way: a single NotFoundError "not found or unchanged".
        """
        validate_application_id(application_id)
        status = parse_status(new_status)
        not_found = NotFoundError(
            "Application",
            application_id,
            f"Application '{application_id}' not found or unchanged",
        )

        app = await self.applications.get(application_id)
        if app is None:
            raise not_found
        service = await self.services.resolve(ServiceRef(app.service_id))
        require_owner_or_admin(identity, service.provider_email if service else None)

        matched = await self.applications.update_where(
            application_id,
            ApplicationRow.status != status.value,
            status=status.value,
            updated_at=utcnow(),
        )
        if not matched:
            raise not_found
        logger.info("Application %s -> %s by %s", application_id, status.value, identity.email)
        return await self.applications.get(application_id)

    async def delete_application(self, application_id: str, identity: SessionIdentity) -> None:
        """Delete an application and release its slot on the service counter."""
        validate_application_id(application_id)
        app = await self.applications.get(application_id)
        if app is None:
            raise NotFoundError("Application", application_id)
        ref = ServiceRef(app.service_id)
        service = await self.services.resolve(ref)
        require_owner_or_admin(
            identity, app.applicant_email, service.provider_email if service else None
        )

        deleted = await self.applications.delete_by_id(application_id)
        if not deleted:
            raise NotFoundError("Application", application_id)
        await self.services.adjust_application_count(ref, -1)
        logger.info("Application %s deleted by %s", application_id, identity.email)
