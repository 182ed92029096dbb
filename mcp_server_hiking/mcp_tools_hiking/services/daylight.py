from __future__ import annotations

from datetime import date
from typing import Optional

import requests

from ..core.cache import FileCache
from ..core.errors import ProviderError
from ..core.schemas import DaylightWindow


SUNRISE_SUNSET_URL = "https://api.sunrise-sunset.org/json"


def get_daylight_window(
    lat: float,
    lon: float,
    day: str,
    cache: Optional[FileCache] = None,
    timeout_s: int = 30,
    base_url: str = SUNRISE_SUNSET_URL,
) -> DaylightWindow:
    """Sunrise/sunset for a point and date (YYYY-MM-DD) via sunrise-sunset.org.

    `formatted=0` makes the API answer with ISO-8601 UTC instants, which is what
    the day planner expects. Token-free; cached by default since the answer for a
    past or future date never changes.
    """
    if lat is None or not -90 <= lat <= 90:
        raise ValueError("lat must be a number in [-90, 90]")
    if lon is None or not -180 <= lon <= 180:
        raise ValueError("lon must be a number in [-180, 180]")
    try:
        day_iso = date.fromisoformat(str(day).strip()).isoformat()
    except ValueError:
        raise ValueError(f"date must be YYYY-MM-DD, got {day!r}") from None

    key = f"sunrise-sunset:{lat:.4f},{lon:.4f}:{day_iso}"
    if cache:
        cached = cache.get(key)
        if cached and "sunrise" in cached and "sunset" in cached:
            return DaylightWindow(sunrise_iso=cached["sunrise"], sunset_iso=cached["sunset"])

    params = {"lat": lat, "lng": lon, "date": day_iso, "formatted": 0}
    r = requests.get(base_url, params=params, timeout=timeout_s)
    if r.status_code >= 400:
        # error bodies carry {"status": "INVALID_REQUEST" | "INVALID_DATE" | ...}
        try:
            err = r.json()
            reason = err.get("status") if isinstance(err, dict) else None
        except ValueError:
            reason = None
        raise ProviderError("sunrise-sunset.org", r.status_code, reason)

    data = r.json()

    status = data.get("status") if isinstance(data, dict) else None
    if status != "OK":
        raise ProviderError("sunrise-sunset.org", r.status_code, status)

    results = data.get("results") or {}
    window = DaylightWindow(sunrise_iso=results["sunrise"], sunset_iso=results["sunset"])
    if cache:
        cache.set(key, {"sunrise": window.sunrise_iso, "sunset": window.sunset_iso})
    return window
