from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from duka.app.core.i18n import SUPPORTED_LANGUAGES, load_messages, text_direction

router = APIRouter()


@router.get("/languages")
def list_languages() -> list[dict[str, str]]:
    return [
        {"code": code, "name": name, "direction": text_direction(code)}
        for code, name in SUPPORTED_LANGUAGES.items()
    ]


@router.get("/{lang}")
def get_messages(lang: str) -> dict[str, object]:
    if lang not in SUPPORTED_LANGUAGES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unsupported language: {lang}"
        )
    return {
        "language": lang,
        "direction": text_direction(lang),
        "messages": load_messages(lang),
    }
