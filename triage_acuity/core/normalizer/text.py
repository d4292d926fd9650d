"""Utilities for normalising free-text labels."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["normalize_label"]


_SEPARATORS_RE = re.compile(r"[\s_\-]+")


def normalize_label(value: object) -> str:
    """Return a lower-cased, accentless, single-spaced version of *value*."""

    if isinstance(value, int) and not isinstance(value, bool):
        return str(int(value))
    if not isinstance(value, str):
        return ""
    normalized = unicodedata.normalize("NFKD", value)
    normalized = normalized.encode("ascii", "ignore").decode("ascii")
    normalized = _SEPARATORS_RE.sub(" ", normalized.lower()).strip()
    return normalized
