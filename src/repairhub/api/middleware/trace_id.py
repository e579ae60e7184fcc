"""Trace ID middleware for request/response propagation."""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from repairhub.logging_config import bind_request_context, clear_request_context

# Same bounds as ErrorDetail.trace_id
TRACE_ID_MIN_LENGTH = 8
TRACE_ID_MAX_LENGTH = 128


def new_trace_id() -> str:
    return f"trc_{uuid.uuid4().hex[:16]}"


def accept_trace_id(header: str | None) -> str:
    """Use the client's X-Trace-Id when it fits the envelope, else mint one."""
    if header and TRACE_ID_MIN_LENGTH <= len(header.strip()) <= TRACE_ID_MAX_LENGTH:
        return header.strip()
    return new_trace_id()


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Extract X-Trace-Id from request or generate one, attach to response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = accept_trace_id(request.headers.get("x-trace-id"))
        request.state.trace_id = trace_id
        bind_request_context(trace_id)
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Trace-Id"] = trace_id
        return response
