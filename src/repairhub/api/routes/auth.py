"""Session issuance routes."""

import logging

from fastapi import APIRouter, Response

from repairhub.config import settings
from repairhub.models.auth import SessionRequest, SessionResponse
from repairhub.services.session_tokens import issue_session_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "none" if settings.cookie_secure else "lax",
        "path": "/",
    }


@router.post("/jwt", response_model=SessionResponse)
async def issue_session(body: SessionRequest, response: Response):
    token = issue_session_token(body.email)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_max_age,
        **_cookie_options(),
    )
    logger.info("Session issued for %s", body.email)
    return SessionResponse(expires_in=settings.session_max_age)


@router.post("/logout")
async def logout(response: Response) -> dict:
    response.delete_cookie(settings.session_cookie_name, **_cookie_options())
    return {"success": True}
