import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from duka.app.api.v1.api import api_router
from duka.app.core.config import settings
from duka.app.core.errors import (
    ActionInProgress,
    AuthError,
    InvalidTransition,
    NotFoundError,
    PosError,
    RemoteError,
    ValidationError,
)
from duka.app.core.i18n import normalize_language, translate
from duka.app.core.logging_setup import configure_logging
from duka.app.middleware.api_key import ApiKeyMiddleware
from duka.app.middleware.language import LanguageMiddleware

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Duka POS")

# ─── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Accept-Language", "apikey"],
    expose_headers=["Content-Disposition", "Content-Language"],
)

# ─── Custom middleware (outermost executes first) ─────────────────────────────
app.add_middleware(ApiKeyMiddleware)
app.add_middleware(LanguageMiddleware)

app.include_router(api_router)


# ─── Error notifications ─────────────────────────────────────────────────────

_STATUS_BY_ERROR: list[tuple[type[PosError], int]] = [
    (ValidationError, 400),
    (AuthError, 401),
    (NotFoundError, 404),
    (ActionInProgress, 409),
    (InvalidTransition, 409),
    (RemoteError, 502),
]


@app.exception_handler(PosError)
async def pos_error_handler(request: Request, exc: PosError) -> JSONResponse:
    """Turn a service error into a translated ``detail`` for the operator."""
    status_code = next(
        (code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 400
    )
    lang = normalize_language(getattr(request.state, "language", None))
    detail = translate(lang, exc.key, **exc.params)
    # A store failure shows the backend's own message when it sent one
    if isinstance(exc, RemoteError) and exc.key == "errors.remote":
        detail = translate(lang, exc.key, message=exc.message)
    return JSONResponse(status_code=status_code, content={"detail": detail, "key": exc.key})
