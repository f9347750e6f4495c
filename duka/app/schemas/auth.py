from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator

from duka.app.core.i18n import SUPPORTED_LANGUAGES


def _check_language(v: str) -> str:
    if v not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {v}")
    return v


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SignUpRequest(BaseModel):
    email: str
    password: str
    language: str = "en"

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("A valid email address is required")
        return v

    @field_validator("language")
    @classmethod
    def language_supported(cls, v: str) -> str:
        return _check_language(v)


class LanguageUpdate(BaseModel):
    language: str

    @field_validator("language")
    @classmethod
    def language_supported(cls, v: str) -> str:
        return _check_language(v)


class UserOut(BaseModel):
    id: UUID
    email: str
    language: str
    is_active: bool
    created_at: datetime | None

    class Config:
        from_attributes = True
