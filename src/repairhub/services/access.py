"""Ownership checks for session identities."""

from dataclasses import dataclass

from repairhub.errors.exceptions import AuthorizationError
from repairhub.models.common import normalize_email


@dataclass(frozen=True)
class SessionIdentity:
    email: str
    is_admin: bool = False

    def __post_init__(self):
        object.__setattr__(self, "email", normalize_email(self.email))

    def owns(self, email: str | None) -> bool:
        return bool(email) and self.email == normalize_email(email)


def require_same_identity(identity: SessionIdentity, email: str) -> None:
    """Scoped listings are only served to the identity they are scoped to."""
    if not identity.owns(email):
        raise AuthorizationError("Forbidden access")


def require_owner_or_admin(identity: SessionIdentity, *owner_emails: str | None) -> None:
    if identity.is_admin:
        return
    if not any(identity.owns(owner) for owner in owner_emails):
        raise AuthorizationError("Forbidden access")
