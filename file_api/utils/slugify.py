"""URL-safe slugs for folder and file names."""

from __future__ import annotations

import re
from unicodedata import normalize

DEFAULT_SLUG = "folder"

# Transliterations that differ from plain accent stripping, per language.
_LANGUAGE_MAPS: dict[str, dict[str, str]] = {
    "de": {
        "ä": "ae", "ö": "oe", "ü": "ue", "Ä": "Ae", "Ö": "Oe", "Ü": "Ue", "ß": "ss",
    },
    "da": {"æ": "ae", "ø": "oe", "å": "aa", "Æ": "Ae", "Ø": "Oe", "Å": "Aa"},
    "nb": {"æ": "ae", "ø": "oe", "å": "aa", "Æ": "Ae", "Ø": "Oe", "Å": "Aa"},
    "bg": {"щ": "sht", "Щ": "Sht", "ъ": "a", "Ъ": "A", "ь": "y", "Ь": "Y"},
}

# Characters NFKD cannot decompose into ASCII.
_ASCII_FALLBACKS = {
    "ß": "ss", "æ": "ae", "Æ": "AE", "ø": "o", "Ø": "O", "œ": "oe", "Œ": "OE",
    "ð": "d", "Ð": "D", "þ": "th", "Þ": "TH", "ł": "l", "Ł": "L", "đ": "d", "Đ": "D",
}


def to_ascii(text: str, language: str = "en") -> str:
    for table in (_LANGUAGE_MAPS.get(language, {}), _ASCII_FALLBACKS):
        for char, replacement in table.items():
            text = text.replace(char, replacement)
    return normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")


def slugify(text: str, separator: str = "-", language: str = "en") -> str:
    text = to_ascii(text or "", (language or "en").lower())
    text = text.replace("@", " at ").replace("_", separator)
    text = re.sub(r"[^a-zA-Z0-9]+", separator, text).strip(separator).lower()
    return text or DEFAULT_SLUG
