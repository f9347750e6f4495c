from __future__ import annotations

from collections.abc import Iterator
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from duka.app.core.database import get_db
from duka.app.core.i18n import normalize_language
from duka.app.core.security import decode_access_token
from duka.app.models.user import User
from duka.app.services.session import AppState, Screen, sessions

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login/access-token")


def get_language(request: Request) -> str:
    """Language resolved by LanguageMiddleware for this request."""
    return normalize_language(getattr(request.state, "language", None))


def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    # None for bad signature, expiry or a signed-out token
    user_id = decode_access_token(token)
    if user_id is None:
        raise credentials_exception
    try:
        uid = UUID(user_id)
    except ValueError:
        raise credentials_exception

    user = db.get(User, uid)
    if user is None:
        raise credentials_exception
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user"
        )
    return user


def get_app_state(current_user: User = Depends(get_current_user)) -> AppState:
    return sessions.get(current_user.id)


def single_flight(screen: Screen):  # type: ignore[no-untyped-def]
    """Dependency factory: hold *screen*'s control disabled for the request.

    A second mutating request for the same screen while one is running gets
    ActionInProgress (409).
    """

    def _guard(state: AppState = Depends(get_app_state)) -> Iterator[AppState]:
        with state.action(screen):
            yield state

    return _guard
