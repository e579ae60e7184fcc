"""Service application API routes."""

from fastapi import APIRouter, Query

from repairhub.dependencies import CurrentIdentity, DBSession
from repairhub.models.application import ApplicationCreate, StatusUpdate
from repairhub.services.applications import ApplicationLifecycle, application_to_dict

router = APIRouter(tags=["Applications"])


@router.post("/service-applications", status_code=201)
async def create_application(
    body: ApplicationCreate,
    identity: CurrentIdentity,
    db: DBSession,
) -> dict:
    created = await ApplicationLifecycle(db).create_application(body, identity)
    await db.commit()
    return {**application_to_dict(created.application), "counted": created.counted}


@router.get("/service-application")
async def list_my_applications(
    identity: CurrentIdentity,
    db: DBSession,
    email: str = Query(...),
) -> list[dict]:
    return await ApplicationLifecycle(db).list_by_applicant(email, identity)


@router.get("/service-application/provider")
async def list_provider_applications(
    identity: CurrentIdentity,
    db: DBSession,
    email: str = Query(...),
) -> list[dict]:
    return await ApplicationLifecycle(db).list_for_provider(email, identity)


@router.get("/service-application/services/{service_id}")
async def list_service_applications(service_id: str, db: DBSession) -> list[dict]:
    """Public: every application submitted against a service."""
    return await ApplicationLifecycle(db).list_by_service(service_id)


@router.patch("/service-application/{application_id}")
async def update_application_status(
    application_id: str,
    body: StatusUpdate,
    identity: CurrentIdentity,
    db: DBSession,
) -> dict:
    app = await ApplicationLifecycle(db).update_status(application_id, body.status, identity)
    await db.commit()
    return {
        "success": True,
        "status": app.status,
        "updatedAt": app.updated_at.isoformat() if app.updated_at else None,
    }


@router.delete("/service-application/{application_id}", status_code=204)
async def delete_application(application_id: str, identity: CurrentIdentity, db: DBSession) -> None:
    await ApplicationLifecycle(db).delete_application(application_id, identity)
    await db.commit()
