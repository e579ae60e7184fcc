"""Session token issuance and verification.

Tokens are HS256 JWTs (python-jose) carried in an HttpOnly cookie. The
payload holds the session email in ``sub``/``email`` plus issuer, audience
and expiry claims. Verification never raises: it returns a
``TokenVerification`` telling the caller whether the identity is valid,
expired or forged.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from repairhub.config import settings
from repairhub.models.enums import TokenStatus

logger = logging.getLogger(__name__)

_TOKEN_TYPE = "session"


@dataclass(frozen=True)
class TokenVerification:
    status: TokenStatus
    email: str | None = None
    reason: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID


def issue_session_token(email: str, expires_in: timedelta | None = None) -> str:
    """Return a signed session token for ``email``."""
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else timedelta(seconds=settings.session_max_age)
    payload = {
        "sub": email,
        "email": email,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + lifetime,
        "type": _TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str | None) -> TokenVerification:
    """Check signature, audience, issuer and expiry of a session token."""
    if not token:
        return TokenVerification(TokenStatus.MISSING)

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except ExpiredSignatureError:
        return TokenVerification(TokenStatus.EXPIRED, reason="Session expired")
    except JWTError as exc:
        logger.debug("Session token rejected: %s", exc)
        return TokenVerification(TokenStatus.INVALID, reason="Invalid session token")

    email = payload.get("email") or payload.get("sub")
    if payload.get("type") != _TOKEN_TYPE or not email:
        return TokenVerification(TokenStatus.INVALID, reason="Not a session token")
    return TokenVerification(TokenStatus.VALID, email=email)
