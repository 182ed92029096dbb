from __future__ import annotations

import re
from typing import List


_WHITESPACE = re.compile(r"\s+")
_MT_PREFIX = re.compile(r"^mt\.?\s+")
_MOUNT_PREFIX = re.compile(r"^mount\s+")
# "A, B and C" -> ["A", "B", "C"]; "and" only as a whole word
_LIST_SEPARATOR = re.compile(r"\s*,\s*|\s+and\s+", re.IGNORECASE)


def normalize_peak_name(name: str) -> str:
    """Comparison key for a peak name.

    "Mt. Washington", "mount washington" and "Washington" all become "washington".
    Only a leading Mt/Mount is dropped, so "Cannon Mountain" stays "cannon mountain".
    """
    text = _WHITESPACE.sub(" ", (name or "").strip().lower())
    text = _MT_PREFIX.sub("mount ", text)
    text = _MOUNT_PREFIX.sub("", text)
    return text.strip()


def split_peak_list(text: str) -> List[str]:
    """Split a comma / "and" list into stripped, non-empty parts."""
    return [p.strip() for p in _LIST_SEPARATOR.split(text.strip()) if p.strip()]
