"""Service catalog API routes."""

from fastapi import APIRouter, Query

from repairhub.dependencies import CurrentIdentity, DBSession
from repairhub.models.service import ServiceCreate, ServicePage, ServiceResponse, ServiceUpdate
from repairhub.services.catalog import (
    ServiceCatalog,
    normalize_page,
    normalize_page_size,
    parse_sort,
)

router = APIRouter(tags=["Services"])


def _service_dict(row) -> dict:
    return ServiceResponse.model_validate(row).to_wire()


@router.get("/services")
async def list_services(
    db: DBSession,
    search: str | None = Query(None),
    sort: str | None = Query(None),
    page: int | None = Query(None),
    limit: int | None = Query(None),
    provider_email: str | None = Query(None, alias="providerEmail"),
    with_applications: bool | None = Query(None, alias="withApplications"),
) -> dict:
    """List services with search, price sort and page-based pagination."""
    catalog = ServiceCatalog(db)
    rows, total = await catalog.list_services(
        search=search,
        provider_email=provider_email,
        only_with_applications=with_applications,
        page=page,
        page_size=limit,
        sort=parse_sort(sort),
    )
    return ServicePage(
        items=[_service_dict(r) for r in rows],
        total=total,
        page=normalize_page(page),
        limit=normalize_page_size(limit),
    ).model_dump()


@router.get("/services-count")
async def count_services(db: DBSession, search: str | None = Query(None)) -> dict:
    return {"count": await ServiceCatalog(db).count_services(search)}


@router.get("/services/popular")
async def popular_services(db: DBSession, limit: int | None = Query(None)) -> list[dict]:
    """Services with at least one application, most applied first."""
    rows = await ServiceCatalog(db).popular_services(limit)
    return [_service_dict(r) for r in rows]


@router.get("/services/{service_id}")
async def get_service(service_id: str, db: DBSession) -> dict:
    row = await ServiceCatalog(db).get_service(service_id)
    return _service_dict(row)


@router.post("/services", status_code=201)
async def create_service(body: ServiceCreate, identity: CurrentIdentity, db: DBSession) -> dict:
    row = await ServiceCatalog(db).create_service(body, identity)
    await db.commit()
    return _service_dict(row)


@router.put("/services/{service_id}")
async def update_service(
    service_id: str,
    body: ServiceUpdate,
    identity: CurrentIdentity,
    db: DBSession,
) -> dict:
    row = await ServiceCatalog(db).update_service(service_id, body, identity)
    await db.commit()
    return _service_dict(row)


@router.delete("/services/{service_id}", status_code=204)
async def delete_service(service_id: str, identity: CurrentIdentity, db: DBSession) -> None:
    await ServiceCatalog(db).delete_service(service_id, identity)
    await db.commit()
