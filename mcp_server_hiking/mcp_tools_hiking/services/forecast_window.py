from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Sequence

from ..utils.clock import ensure_tz, parse_instant


def slice_next_hours(
    times_iso: Sequence[str],
    arrays: Dict[str, Any],
    *,
    now: datetime,
    hours: int = 12,
    timezone: str = "UTC",
) -> Dict[str, Any]:
    """Cut parallel hourly arrays down to the next `hours` hours starting at `now`.

    - empty `times_iso` -> `arrays` is returned unchanged
    - the window starts at the first timestamp >= now, or at index 0 if every
      timestamp is in the past
    - list/tuple values are sliced to [idx, idx + hours), clamped to the series;
      other values pass through
    - naive timestamps are read in `timezone`; unparseable ones never qualify

    `now` is a parameter so callers (and tests) decide what "now" is.
    """
    if not times_iso:
        return arrays

    now = ensure_tz(now, timezone)
    idx = next((i for i, t in enumerate(times_iso) if _at_or_after(t, now, timezone)), 0)
    end = min(idx + max(0, int(hours)), len(times_iso))

    out: Dict[str, Any] = {}
    for key, values in arrays.items():
        out[key] = values[idx:end] if isinstance(values, (list, tuple)) else values
    return out


def _at_or_after(value: str, now: datetime, timezone: str) -> bool:
    try:
        return parse_instant(value, timezone) >= now
    except (TypeError, ValueError):
        return False
