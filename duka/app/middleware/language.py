"""Accept-Language detection middleware."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from duka.app.core.config import settings
from duka.app.core.i18n import SUPPORTED_LANGUAGES, normalize_language


class LanguageMiddleware(BaseHTTPMiddleware):
    """Parse ``Accept-Language`` and expose ``request.state.language``.

    ``en``, ``sw`` and ``ar`` are supported; anything else resolves to
    ``DEFAULT_LANGUAGE``. The resolved language is echoed back via the
    ``Content-Language`` response header.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        accept = request.headers.get("Accept-Language", "")
        language = parse_preferred(accept)
        request.state.language = language

        response = await call_next(request)
        response.headers["Content-Language"] = language
        return response


def parse_preferred(header: str) -> str:
    """Return the best supported language from an Accept-Language header."""
    for part in header.split(","):
        tag = part.split(";")[0].strip().lower()
        # Match full tag or primary subtag (e.g. "sw-TZ" → "sw")
        if tag in SUPPORTED_LANGUAGES:
            return tag
        primary = tag.split("-")[0]
        if primary in SUPPORTED_LANGUAGES:
            return primary
    return normalize_language(settings.DEFAULT_LANGUAGE)
