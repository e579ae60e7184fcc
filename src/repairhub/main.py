"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repairhub.config import API_VERSION, settings
from repairhub.db.engine import create_db_engine, create_session_factory, create_tables
from repairhub.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    engine = create_db_engine()
    await create_tables(engine)

    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)

    logger.info("RepairHub API started (db=%s)", engine.url.get_backend_name())
    yield

    await engine.dispose()
    logger.info("RepairHub API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="RepairHub API",
        version=API_VERSION,
        description="Home-repair services marketplace: listings, applications and status tracking.",
        lifespan=lifespan,
    )

    # CORS for the browser client; credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add middleware (order matters: last added = first executed)
    from repairhub.api.middleware.session import SessionMiddleware
    from repairhub.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(SessionMiddleware)
    app.add_middleware(TraceIdMiddleware)

    # Register error handlers
    from repairhub.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    # Import and mount routers
    from repairhub.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
