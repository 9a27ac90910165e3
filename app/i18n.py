"""Localized text lookup (Haitian Creole, French, English).

Precedence for a dotted key: the requested language's table, then the fallback
table (English), then the key itself.
"""

from __future__ import annotations

import json
import os
import re
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from app.config import FALLBACK_LANGUAGE, SUPPORTED_LANGUAGES, TRANSLATIONS_DIR


def _resolve(table: Optional[Mapping[str, Any]], key: str) -> Optional[str]:
    value: Any = table
    for part in key.split("."):
        if isinstance(value, Mapping) and part in value:
            value = value[part]
        else:
            return None
    return value if isinstance(value, str) else None


def lookup(
    table: Optional[Mapping[str, Any]],
    key: str,
    fallback_table: Optional[Mapping[str, Any]] = None,
) -> str:
    found = _resolve(table, key)
    if found is None:
        found = _resolve(fallback_table, key)
    return key if found is None else found


@lru_cache(maxsize=None)
def load_table(language: str) -> Dict[str, Any]:
    if language not in SUPPORTED_LANGUAGES:
        return {}
    path = os.path.join(TRANSLATIONS_DIR, f"{language}.json")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def normalize_language(language: Optional[str]) -> str:
    lang = (language or "").strip().lower()[:2]
    return lang if lang in SUPPORTED_LANGUAGES else FALLBACK_LANGUAGE


def translate(language: Optional[str], key: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Look up ``key`` for ``language`` and substitute ``{{param}}`` placeholders."""
    text = lookup(load_table(normalize_language(language)), key, load_table(FALLBACK_LANGUAGE))
    for name, val in (params or {}).items():
        text = re.sub(r"\{\{" + re.escape(str(name)) + r"\}\}", lambda _m: str(val), text)
    return text
