# sane_permalinks/services/slugify.py
import re
import unicodedata
from typing import Optional

# Letters that NFKD leaves alone but that have a conventional ASCII spelling.
_TRANSLITERATIONS = str.maketrans({
    "ß": "ss",
    "ẞ": "SS",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ø": "o",
    "Ø": "O",
    "đ": "d",
    "Đ": "D",
    "ð": "d",
    "Ð": "D",
    "ł": "l",
    "Ł": "L",
    "þ": "th",
    "Þ": "TH",
    "ı": "i",
})

_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")


def transliterate(text: str) -> str:
    """Fold accented letters to plain ASCII, dropping anything without an equivalent."""
    t = text.translate(_TRANSLITERATIONS)
    # NFKD splits "é" into "e" + combining accent; the ascii encode drops the accent
    return unicodedata.normalize("NFKD", t).encode("ascii", "ignore").decode("ascii")


def sanitize_param(text: Optional[str]) -> Optional[str]:
    """Turn arbitrary text into a permalink slug: lowercase, no accents, single hyphens.

    ``None`` passes through untouched so a missing title stays missing.
    """
    if text is None:
        return None
    t = transliterate(str(text)).lower()
    # any run of non letter/digit characters becomes a single "-"
    return _SEPARATOR_RE.sub("-", t).strip("-")


def slugify(text: Optional[str], fallback: str = "record") -> str:
    """Like ``sanitize_param`` but never empty."""
    return sanitize_param(text) or fallback
