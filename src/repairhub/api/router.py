"""Master API router."""

from fastapi import APIRouter

from repairhub.api.routes import applications, auth, health, services

api_router = APIRouter()
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router)
api_router.include_router(services.router)
api_router.include_router(applications.router)
