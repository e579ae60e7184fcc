"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text

from repairhub.config import API_VERSION, SERVICE_NAME

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Service is falling from the sky"


@router.get("/health")
async def health_check():
    """Return service health status."""
    return {"status": "healthy", "service": SERVICE_NAME, "version": API_VERSION}


@router.get("/health/live")
async def liveness():
    """Liveness check: always 200 while the process is running."""
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness(request: Request):
    """Readiness check: checks database connectivity."""
    checks: dict[str, str] = {}
    overall_ok = True

    try:
        session_factory = request.app.state.db_session_factory
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as exc:
        checks["database"] = f"error: {exc}"
        overall_ok = False

    status_code = 200 if overall_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if overall_ok else "not_ready",
            "checks": checks,
        },
    )
