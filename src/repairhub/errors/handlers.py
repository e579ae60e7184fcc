"""FastAPI exception handlers producing the ErrorResponse envelope."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from repairhub.errors.exceptions import (
    AuthorizationError,
    PersistenceError,
    RepairHubError,
    ValidationError,
)
from repairhub.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def _render(request: Request, exc: RepairHubError) -> JSONResponse:
    trace_id = getattr(request.state, "trace_id", "trc_unknown")
    error_response = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            trace_id=trace_id,
            timestamp=datetime.now(timezone.utc),
        ),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(RepairHubError)
    async def repairhub_error_handler(request: Request, exc: RepairHubError):
        if isinstance(exc, AuthorizationError):
            identity = getattr(request.state, "identity", None)
            logger.warning(
                "access_denied",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "user_email": getattr(identity, "email", None) or "anonymous",
                    "reason": str(exc),
                },
            )
        return _render(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _render(request, ValidationError("Request failed validation", details))

    @app.exception_handler(SQLAlchemyError)
    async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "persistence_failure",
            extra={"path": request.url.path, "method": request.method, "error": str(exc)},
        )
        return _render(request, PersistenceError())
