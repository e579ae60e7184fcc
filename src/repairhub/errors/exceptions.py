"""Custom exception classes for the RepairHub API."""


class RepairHubError(Exception):
    """Base exception for RepairHub."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(RepairHubError):
    """Malformed identifier, missing required field or invalid enum value."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(RepairHubError):
    """Resource not found, or an update/delete matched zero documents."""

    def __init__(self, resource: str, resource_id: str, message: str | None = None):
        super().__init__(
            "NOT_FOUND",
            message or f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class UnchangedError(NotFoundError):
    """Update matched a document but no field actually changed."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(resource, resource_id, f"{resource} '{resource_id}' unchanged")
        self.code = "NOT_MODIFIED"


class AuthenticationError(RepairHubError):
    """Session token missing, invalid or expired."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(RepairHubError):
    """Authenticated identity does not own the requested resource."""

    def __init__(self, message: str = "Forbidden access"):
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class PersistenceError(RepairHubError):
    """Underlying store failure."""

    def __init__(self, message: str = "Persistence failure"):
        super().__init__("PERSISTENCE_ERROR", message, status_code=500)
