"""Helpers for dotted server version strings like "1.24" or "2.9.1"."""

import re

_NUMERIC_PREFIX_RE = re.compile(r"\d*\.?\d+|\d+")


def version_to_float(raw: str | None) -> float:
    """
    Convert a version like "1.24" to a float.

    Only the leading numeric part counts ("1.2.3" → 1.2); strings with no
    digits (".", "..") give 0.0. Floats don't order versions correctly
    (1.24 < 1.7), so use version_tuple for comparisons.
    """
    if not raw:
        return 0.0
    match = _NUMERIC_PREFIX_RE.match(raw)
    if not match:
        return 0.0
    return float(match.group(0))


def version_tuple(raw: str | None) -> tuple[int, ...]:
    """Split into integers: "1.24" → (1, 24), "2.9.1" → (2, 9, 1)."""
    if not raw:
        return ()
    return tuple(int(part) for part in raw.split(".") if part.isdigit())
