"""Session cookie authentication middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from repairhub.config import settings
from repairhub.logging_config import bind_request_context
from repairhub.services.session_tokens import verify_session_token

logger = logging.getLogger(__name__)


def _extract_token(request: Request) -> str | None:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    auth_header = request.headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


class SessionMiddleware(BaseHTTPMiddleware):
    """Verify the session token, if any, and attach the result to request.state.

    Nothing is rejected here; routes that need an identity depend on
    ``get_current_identity``.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        verification = verify_session_token(_extract_token(request))
        request.state.session = verification
        if verification.email:
            bind_request_context(getattr(request.state, "trace_id", "trc_unknown"), verification.email)
            logger.debug("Session for %s on %s", verification.email, request.url.path)
        return await call_next(request)
