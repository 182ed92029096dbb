from __future__ import annotations

from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo


def ensure_tz(dt: datetime, timezone: str) -> datetime:
    """Attach `timezone` to a naive datetime; aware datetimes are returned as-is."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=ZoneInfo(timezone))
    return dt


def parse_instant(value: Any, timezone: str = "UTC") -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Accepts a trailing `Z`. Naive values (Open-Meteo hourly stamps, for example) are
    read in `timezone`. Raises ValueError/TypeError for anything unparseable.
    """
    if isinstance(value, datetime):
        return ensure_tz(value, timezone)
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO-8601 string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_tz(datetime.fromisoformat(text), timezone)


def format_clock(dt: datetime, timezone: str) -> str:
    """Render an instant as local wall-clock time, e.g. '11:30 AM'."""
    local = dt.astimezone(ZoneInfo(timezone))
    hour12 = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour12}:{local.minute:02d} {suffix}"


def local_iso(dt: datetime, timezone: str) -> str:
    """ISO-8601 string of an instant in `timezone`, offset included."""
    return dt.astimezone(ZoneInfo(timezone)).isoformat()
