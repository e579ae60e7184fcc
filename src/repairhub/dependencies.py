"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from repairhub.config import settings
from repairhub.errors.exceptions import AuthenticationError
from repairhub.models.enums import TokenStatus
from repairhub.services.access import SessionIdentity
from repairhub.services.session_tokens import TokenVerification


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session from the app's session factory.

    The session is rolled back and closed on exit, so a failed request never
    leaves a half-open transaction on the shared engine.
    """
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


async def get_current_identity(request: Request) -> SessionIdentity:
    """Return the session identity or raise 401."""
    verification: TokenVerification | None = getattr(request.state, "session", None)
    if verification is None or verification.status is TokenStatus.MISSING:
        raise AuthenticationError("Authentication required")
    if not verification.is_valid:
        raise AuthenticationError(verification.reason or "Invalid session token")
    identity = SessionIdentity(
        email=verification.email,
        is_admin=settings.is_admin(verification.email),
    )
    request.state.identity = identity
    return identity


# Type aliases for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentIdentity = Annotated[SessionIdentity, Depends(get_current_identity)]
