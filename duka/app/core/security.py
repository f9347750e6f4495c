from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from duka.app.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = "HS256"

# Signed-out tokens; single process, so an in-memory set is enough
_revoked_tokens: set[str] = set()


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta
        else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": subject, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str | None:
    """Return the token subject, or None when the token is invalid or revoked."""
    if is_token_revoked(token):
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def validate_password_strength(password: str) -> str | None:
    """Return an error message key if *password* is too weak, None otherwise."""
    if len(password) < 8:
        return "auth.password_too_short"
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        return "auth.password_needs_letter_and_digit"
    return None


def revoke_token(token: str) -> None:
    _revoked_tokens.add(token)


def is_token_revoked(token: str) -> bool:
    return token in _revoked_tokens


def cleanup_expired_tokens() -> int:
    """Drop revoked tokens that have expired anyway. Returns how many were dropped."""
    expired: list[str] = []
    for token in _revoked_tokens:
        try:
            jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        except JWTError:
            # ExpiredSignatureError is a JWTError; malformed tokens go too
            expired.append(token)
    for token in expired:
        _revoked_tokens.discard(token)
    return len(expired)
