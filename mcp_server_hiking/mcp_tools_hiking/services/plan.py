from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Any, Optional

from ..core.errors import InvalidTimeError
from ..core.schemas import PlanResult
from ..core.settings import PlanSettings
from ..utils.clock import format_clock, local_iso, parse_instant


def compute_plan(
    sunrise_iso: Any,
    sunset_iso: Any,
    duration_hours: float,
    settings: Optional[PlanSettings] = None,
    timezone: str = "America/New_York",
) -> PlanResult:
    """Compute a conservative day plan from daylight and a hike duration.

    Rules:
      - earliest start = sunrise + 30 min
      - finish deadline = sunset - 90 min
      - start = max(earliest start, finish deadline - duration)
      - turnaround = start + 0.6 * duration, never later than the finish deadline

    A hike longer than the usable daylight still gets a plan (start pinned to the
    earliest start); `feasible` is then False and it is up to the caller to flag it.
    Times are rendered in `timezone`.
    """
    cfg = settings or PlanSettings()
    sunrise = _parse(sunrise_iso, "sunrise", timezone)
    sunset = _parse(sunset_iso, "sunset", timezone)

    duration = timedelta(hours=float(duration_hours))
    earliest_start = sunrise + timedelta(minutes=cfg.start_after_sunrise_minutes)
    finish_deadline = sunset - timedelta(minutes=cfg.finish_before_sunset_minutes)
    latest_start = finish_deadline - duration

    start = max(earliest_start, latest_start)
    turnaround = min(start + duration * cfg.turnaround_fraction, finish_deadline)

    return PlanResult(
        start=format_clock(start, timezone),
        turnaround=format_clock(turnaround, timezone),
        finish_deadline=format_clock(finish_deadline, timezone),
        start_iso=local_iso(start, timezone),
        turnaround_iso=local_iso(turnaround, timezone),
        finish_deadline_iso=local_iso(finish_deadline, timezone),
        feasible=latest_start >= earliest_start,
    )


def _parse(value: Any, field: str, timezone: str) -> datetime:
    try:
        # arithmetic in UTC so a DST change between sunrise and sunset cannot shift instants
        return parse_instant(value, timezone).astimezone(dt_timezone.utc)
    except (TypeError, ValueError) as e:
        raise InvalidTimeError(value, field) from e
