from __future__ import annotations

"""Hourly summit forecast (Open-Meteo).

Open-Meteo downscales to the requested `elevation`, so asking with the summit
elevation gives summit-ish temperatures and winds instead of valley values.

The returned ForecastSeries has offset-bearing timestamps: Open-Meteo returns
naive local times for the requested `timezone`, and we localize them here so the
window selector never has to guess.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..core.cache import FileCache
from ..core.errors import ProviderError
from ..core.schemas import ForecastSeries
from ..utils.clock import local_iso, parse_instant


logger = logging.getLogger(__name__)

FORECAST_BASE_URL = "https://api.open-meteo.com/v1/forecast"

HOURLY_FIELDS = {
    "temperature_2m": "temperature_f",
    "apparent_temperature": "apparent_temp_f",
    "wind_speed_10m": "wind_mph",
    "wind_gusts_10m": "gust_mph",
    "precipitation_probability": "precip_prob",
}

FEET_TO_METERS = 0.3048


def get_hourly_forecast(
    lat: float,
    lon: float,
    elevation_ft: Optional[float] = None,
    cache: Optional[FileCache] = None,
    timeout_s: int = 30,
    base_url: str = FORECAST_BASE_URL,
    timezone: str = "America/New_York",
    max_elevation_ft: float = 10000,
) -> ForecastSeries:
    """Return hourly temperature/apparent temperature/wind/gust/precip for a point.

    Args:
        lat/lon: WGS84 coordinates.
        elevation_ft: Summit elevation in feet; sent to Open-Meteo in metres.
        cache: Optional file cache (entries expire after the cache TTL).
        timezone: Zone Open-Meteo reports local times in.
        max_elevation_ft: Sanity bound for elevation_ft.

    Raises:
        ValueError: coordinates or elevation out of range.
        ProviderError: Open-Meteo answered with an error status.
    """
    if lat is None or not -90 <= lat <= 90:
        raise ValueError("lat must be a number in [-90, 90]")
    if lon is None or not -180 <= lon <= 180:
        raise ValueError("lon must be a number in [-180, 180]")
    if elevation_ft is not None and not 0 <= elevation_ft <= max_elevation_ft:
        raise ValueError(f"elevation (ft) out of range [0, {max_elevation_ft:g}]")

    elevation_m = round(elevation_ft * FEET_TO_METERS) if elevation_ft is not None else None

    key = f"openmeteo:hourly:{lat:.5f},{lon:.5f}:{elevation_m}:{timezone}"
    if cache:
        cached = cache.get(key)
        if cached:
            return _series_from_openmeteo(cached, timezone)

    params: Dict[str, Any] = {
        "latitude": lat,
        "longitude": lon,
        "hourly": ",".join(HOURLY_FIELDS),
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "timezone": timezone,
    }
    if elevation_m is not None:
        params["elevation"] = elevation_m

    logger.info("Fetching Open-Meteo hourly forecast for %.4f,%.4f (elevation %s m)", lat, lon, elevation_m)
    r = requests.get(base_url, params=params, timeout=timeout_s)
    if r.status_code >= 400:
        # Open-Meteo puts the cause of 400s into {"reason": ...}
        try:
            err = r.json()
            reason = err.get("reason") if isinstance(err, dict) else None
        except ValueError:
            reason = None
        raise ProviderError("Open-Meteo", r.status_code, reason)

    data = r.json()
    if cache:
        cache.set(key, data)

    return _series_from_openmeteo(data, timezone)


def _series_from_openmeteo(data: Dict[str, Any], timezone: str) -> ForecastSeries:
    """Transform a raw Open-Meteo payload into a ForecastSeries."""
    hourly = data.get("hourly") or {}
    times = [_localize(t, timezone) for t in hourly.get("time") or []]

    values: Dict[str, List[Optional[float]]] = {}
    for api_field, attr in HOURLY_FIELDS.items():
        raw = hourly.get(api_field) or []
        values[attr] = [_safe_float(raw, i) for i in range(len(raw))]

    return ForecastSeries(time=times, **values)


def _localize(value: str, timezone: str) -> str:
    try:
        return local_iso(parse_instant(value, timezone), timezone)
    except (TypeError, ValueError):
        return value


def _safe_float(arr: List[Any], idx: int) -> Optional[float]:
    try:
        v = arr[idx]
        return None if v is None else float(v)
    except (IndexError, TypeError, ValueError):
        return None
