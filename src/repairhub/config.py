"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

SERVICE_NAME = "repairhub-api"
API_VERSION = "1.0.0"


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///repairhub.db"

    # Session tokens (JWT carried in an HttpOnly cookie)
    jwt_secret: str = "dev-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "repairhub-api"
    jwt_audience: str = "repairhub"
    session_token_expire_minutes: int = 60
    session_cookie_name: str = "token"
    cookie_secure: bool = False

    # Identities allowed to manage any service or application
    admin_emails: list[str] = []

    # CORS
    cors_allowed_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Catalog
    provider_dashboard_only_with_applications: bool = False
    max_page_size: int = 100
    max_page: int = 100_000
    popular_services_limit: int = 6

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"
    json_logs: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "REPAIRHUB_",
    }

    @property
    def session_max_age(self) -> int:
        """Session lifetime in seconds."""
        return self.session_token_expire_minutes * 60

    def is_admin(self, email: str | None) -> bool:
        return bool(email) and email.lower() in {e.lower() for e in self.admin_emails}


settings = Settings()
