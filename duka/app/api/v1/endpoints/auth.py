from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from duka.app.api.deps import get_current_user, get_language, oauth2_scheme
from duka.app.core.config import settings
from duka.app.core.database import as_utc, get_db, utcnow
from duka.app.core.i18n import translate
from duka.app.core.security import (
    create_access_token,
    get_password_hash,
    revoke_token,
    validate_password_strength,
    verify_password,
)
from duka.app.middleware.rate_limit import InMemoryRateLimiter
from duka.app.models.user import User
from duka.app.schemas.auth import LanguageUpdate, SignUpRequest, Token, UserOut
from duka.app.services.audit import log_action
from duka.app.services.session import sessions

logger = logging.getLogger(__name__)

router = APIRouter()

# ─── Rate Limiting ───────────────────────────────────────────────────────────
# Per-IP, in this process only.
_login_limiter = InMemoryRateLimiter(window_seconds=60, max_attempts=5)


@router.post("/login", response_model=Token)
@router.post("/login/access-token", response_model=Token)
def login_access_token(
    request: Request,
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Token:
    """Sign in with email (as ``username``) and password."""
    ip = request.client.host if request.client else "unknown"
    _login_limiter.check(ip)

    email = form_data.username.strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if user and user.locked_until:
        now = utcnow()
        locked_until = as_utc(user.locked_until)
        if now < locked_until:
            remaining = int((locked_until - now).total_seconds() // 60) + 1
            log_action(
                db,
                user_id=user.id,
                action="LOGIN_BLOCKED",
                resource_type="auth",
                resource_id=email,
                ip_address=ip,
                changes={"reason": "account_locked"},
            )
            db.commit()
            logger.warning("Sign-in blocked for locked account %s", email)
            raise HTTPException(
                status_code=status.HTTP_423_LOCKED,
                detail=translate(lang, "auth.account_locked", minutes=remaining),
            )
        # Lockout expired
        user.failed_login_attempts = 0
        user.locked_until = None

    if not user or not verify_password(form_data.password, user.hashed_password):
        if user:
            user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
            if user.failed_login_attempts >= settings.MAX_LOGIN_ATTEMPTS:
                user.locked_until = utcnow() + timedelta(minutes=settings.LOCKOUT_MINUTES)
                log_action(
                    db,
                    user_id=user.id,
                    action="ACCOUNT_LOCKED",
                    resource_type="auth",
                    resource_id=email,
                    ip_address=ip,
                    changes={"failed_attempts": user.failed_login_attempts},
                )

        log_action(
            db,
            user_id=user.id if user else None,
            action="LOGIN_FAILED",
            resource_type="auth",
            resource_id=email,
            ip_address=ip,
            changes={"reason": "invalid_credentials"},
        )
        db.commit()
        logger.warning("Failed sign-in for %s from %s", email, ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=translate(lang, "auth.invalid_credentials"),
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        log_action(
            db,
            user_id=user.id,
            action="LOGIN_FAILED",
            resource_type="auth",
            resource_id=email,
            ip_address=ip,
            changes={"reason": "inactive_user"},
        )
        db.commit()
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=translate(lang, "auth.inactive_user")
        )

    user.failed_login_attempts = 0
    user.locked_until = None

    log_action(
        db,
        user_id=user.id,
        action="LOGIN_SUCCESS",
        resource_type="auth",
        resource_id=str(user.id),
        ip_address=ip,
        changes={"email": user.email},
    )
    db.commit()

    sessions.sign_in(user.id)
    logger.info("User %s signed in", user.email)
    return Token(access_token=create_access_token(subject=str(user.id)))


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignUpRequest,
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
) -> User:
    weakness = validate_password_strength(payload.password)
    if weakness:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=translate(lang, weakness))
    if db.query(User).filter(User.email == payload.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=translate(lang, "auth.email_taken")
        )

    user = User(
        email=payload.email,
        hashed_password=get_password_hash(payload.password),
        language=payload.language,
    )
    db.add(user)
    db.flush()
    log_action(
        db,
        user_id=user.id,
        action="SIGNUP",
        resource_type="auth",
        resource_id=str(user.id),
        changes={"email": user.email},
    )
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.email)
    return user


# ─── Logout ─────────────────────────────────────────────────────────────────


@router.post("/logout")
def logout(
    token: str = Depends(oauth2_scheme),
    current_user: User = Depends(get_current_user),
    lang: str = Depends(get_language),
) -> dict[str, str]:
    """Invalidate the current access token and drop the screen state."""
    revoke_token(token)
    sessions.sign_out(current_user.id)
    return {"detail": translate(lang, "auth.logged_out")}


@router.get("/me", response_model=UserOut)
def read_me(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.put("/me/language", response_model=UserOut)
def update_my_language(
    payload: LanguageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> User:
    current_user.language = payload.language
    db.commit()
    db.refresh(current_user)
    return current_user
