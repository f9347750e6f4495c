"""``apikey`` header gate in front of the API."""

from __future__ import annotations

import logging
import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from duka.app.core.config import settings
from duka.app.core.i18n import translate

logger = logging.getLogger(__name__)

HEADER = "apikey"
# Reachable without the key: docs and the translation bundles
_OPEN_PREFIXES = ("/docs", "/openapi.json", "/redoc", "/api/v1/i18n")


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests whose ``apikey`` header does not match ``STORE_API_KEY``.

    While the key is still the placeholder the gate lets everything through.
    """

    def __init__(self, app, api_key: str | None = None) -> None:  # type: ignore[no-untyped-def]
        super().__init__(app)
        self.api_key = api_key if api_key is not None else settings.STORE_API_KEY
        self.enabled = api_key is not None or settings.api_key_enabled
        if not self.enabled:
            logger.warning("STORE_API_KEY is not set; the apikey header is not checked")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.enabled or request.method == "OPTIONS" or request.url.path.startswith(_OPEN_PREFIXES):
            return await call_next(request)
        supplied = request.headers.get(HEADER, "")
        if not secrets.compare_digest(supplied, self.api_key):
            lang = getattr(request.state, "language", "en")
            return JSONResponse(
                status_code=401,
                content={"detail": translate(lang, "errors.invalid_api_key")},
            )
        return await call_next(request)
