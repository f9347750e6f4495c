"""Translation lookup over the en / sw / ar message bundles."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"
_FALLBACK_LANG = "en"

SUPPORTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "sw": "Kiswahili",
    "ar": "العربية",
}
RTL_LANGUAGES = frozenset({"ar"})


@lru_cache(maxsize=4)
def load_messages(lang: str) -> dict[str, str]:
    """Load the flat messages JSON bundle for *lang*."""
    path = _LOCALES_DIR / lang / "messages.json"
    if not path.exists():
        logger.warning("Locale file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def normalize_language(lang: str | None) -> str:
    if lang and lang in SUPPORTED_LANGUAGES:
        return lang
    return _FALLBACK_LANG


def is_rtl(lang: str) -> bool:
    return lang in RTL_LANGUAGES


def text_direction(lang: str) -> str:
    return "rtl" if is_rtl(lang) else "ltr"


def translate(lang: str, key: str, **kwargs: object) -> str:
    """Return the translated string for *key* in *lang*.

    Falls back to English, then to the raw key if not found.
    Supports ``{placeholder}`` interpolation via *kwargs*.
    """
    messages = load_messages(normalize_language(lang))
    text = messages.get(key)
    if text is None and lang != _FALLBACK_LANG:
        text = load_messages(_FALLBACK_LANG).get(key)
    if text is None:
        return key
    if kwargs:
        try:
            text = text.format(**kwargs)
        except KeyError:
            pass
    return text
