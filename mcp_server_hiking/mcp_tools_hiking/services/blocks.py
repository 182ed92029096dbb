from __future__ import annotations

"""Normalize render blocks coming back from the agent.

The model fills `render_blocks` from earlier tool results, and those results use
several spellings for the same thing (`sunrise`, `sunRise`, `sunriseISO`; risk
`minApparentF` vs card `summitTempF`). Each canonical field declares the keys it
accepts, in priority order; the first key with a usable value wins. Unknown block
types are dropped, order is kept, and extra fields are not carried over.
"""

import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.schemas import (
    DaylightCardBlock,
    ForecastCardBlock,
    RenderBlock,
    RiskBadgeBlock,
)


DAYLIGHT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "sunrise_iso": ("sunriseISO", "sunrise", "sunRise"),
    "sunset_iso": ("sunsetISO", "sunset", "sunSet"),
    "start_iso": ("startISO", "start"),
    "turnaround_iso": ("turnaroundISO", "turnaround", "turn"),
    "finish_deadline_iso": ("finishDeadlineISO", "finishDeadline", "finish"),
}

# card field -> (keys inside each hourly row, aggregate, scalar fallback keys)
FORECAST_FIELDS: Dict[str, Tuple[Tuple[str, ...], Callable[[Iterable[float]], float], Tuple[str, ...]]] = {
    "summit_temp_f": (("apparentF", "apparentTempF"), min, ("summitTempF", "minApparentF")),
    "summit_wind_gust_mph": (("gustMph", "windGustMph"), max, ("summitWindGustMph", "maxGustMph")),
    "precip_prob_pct": (("precipProb", "precipProbPct"), max, ("precipProbPct", "maxPrecipProb")),
}

RISK_LEVELS = ("low", "moderate", "high")


def normalize_blocks(raw_blocks: Sequence[Any]) -> List[RenderBlock]:
    out: List[RenderBlock] = []
    for raw in raw_blocks or []:
        if not isinstance(raw, Mapping):
            continue
        kind = str(raw.get("type") or "").strip().lower()
        normalizer = _NORMALIZERS.get(kind)
        if normalizer is not None:
            out.append(normalizer(raw))
    return out


def normalize_daylight(raw: Mapping[str, Any]) -> DaylightCardBlock:
    values = {}
    for name, keys in DAYLIGHT_FIELDS.items():
        value = _first_present(raw, keys)
        values[name] = None if value is None else str(value)
    return DaylightCardBlock(**values)


def normalize_forecast(raw: Mapping[str, Any]) -> ForecastCardBlock:
    """Summit summary for the forecast card.

    Hourly rows in `forecast` win (min apparent temp, max gust, max precip over the
    rows). Without usable rows, fall back to scalar fields, then to a nested risk
    `summary` mapping.
    """
    forecast = raw.get("forecast")
    rows = [r for r in forecast if isinstance(r, Mapping)] if isinstance(forecast, list) else []
    summary = raw.get("summary")
    if not isinstance(summary, Mapping):
        summary = {}

    values: Dict[str, Optional[float]] = {}
    for name, (row_keys, aggregate, scalar_keys) in FORECAST_FIELDS.items():
        from_rows = [n for n in (_number(_first_present(r, row_keys)) for r in rows) if n is not None]
        if from_rows:
            values[name] = aggregate(from_rows)
            continue
        value = _first_number(raw, scalar_keys)
        if value is None:
            value = _first_number(summary, scalar_keys)
        values[name] = value

    note = raw.get("note")
    return ForecastCardBlock(note=note if isinstance(note, str) and note else None, **values)


def normalize_risk(raw: Mapping[str, Any]) -> RiskBadgeBlock:
    level = str(raw.get("level") or "").strip().lower()
    reasons = raw.get("reasons")
    return RiskBadgeBlock(
        level=level if level in RISK_LEVELS else "low",
        reasons=[str(r) for r in reasons if r is not None] if isinstance(reasons, list) else [],
    )


_NORMALIZERS: Dict[str, Callable[[Mapping[str, Any]], RenderBlock]] = {
    "daylight_card": normalize_daylight,
    "risk_badge": normalize_risk,
    "forecast_card": normalize_forecast,
}


def _first_present(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _first_number(raw: Mapping[str, Any], keys: Iterable[str]) -> Optional[float]:
    for key in keys:
        value = _number(raw.get(key))
        if value is not None:
            return value
    return None


def _number(value: Any) -> Optional[float]:
    """Finite float from a number or numeric string, else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None
