"""
Slug Normalization
"""

import re

MAX_SLUG_LENGTH = 140

_QUOTES = re.compile(r"['\"]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str | None) -> str:
    """Lowercase ``value`` and collapse everything but ``[a-z0-9]`` into single dashes."""
    text = str(value or "").lower().strip()
    text = _QUOTES.sub("", text)
    text = _NON_ALNUM.sub("-", text)
    return text.strip("-")[:MAX_SLUG_LENGTH]
