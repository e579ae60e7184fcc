"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from repairhub.config import settings
from repairhub.db.base import Base
# Import all models to register with Base.metadata
import repairhub.db.models  # noqa: F401
from repairhub.services.session_tokens import issue_session_token

PROVIDER = "provider@fixit.com"
APPLICANT = "applicant@home.com"


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    from repairhub.main import create_app

    _app = create_app()
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = session_factory
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Build a Cookie header carrying a valid session for ``email``."""

    def _headers(email: str) -> dict:
        return {"Cookie": f"{settings.session_cookie_name}={issue_session_token(email)}"}

    return _headers


@pytest.fixture
def make_service(client, auth_headers):
    """Create a service through the API and return its JSON body."""

    async def _make(**overrides) -> dict:
        payload = {
            "providerEmail": PROVIDER,
            "providerName": "Pat Plumber",
            "providerImage": "https://img.example/pat.png",
            "serviceName": "Leak Fix",
            "serviceArea": "Riverside",
            "price": 80,
        }
        payload.update(overrides)
        r = await client.post(
            "/services", json=payload, headers=auth_headers(payload["providerEmail"])
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_application(client, auth_headers):
    """Submit an application through the API and return its JSON body."""

    async def _make(service_id: str, applicant: str = APPLICANT, **extra) -> dict:
        payload = {"service_id": service_id, "applicant_email": applicant, **extra}
        r = await client.post(
            "/service-applications", json=payload, headers=auth_headers(applicant)
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _make
