"""Settings (Pydantic + YAML).

Settings come from the packaged `defaults.yaml`, or from the YAML file named by
`HIKING_CONFIG_PATH`. A few environment variables are overlaid on top:

- HIKING_LOG_LEVEL
- HIKING_CACHE_DIR
- HIKING_TIMEZONE

Peak lists, aliases, durations and risk thresholds live in YAML so they can be
tuned without touching the services.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> Dict[str, Any]:
    text = resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: Union[str, Path]) -> Dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "hiking-planner"
    timezone: str = "America/New_York"
    log_level: str = "INFO"
    http_timeout_seconds: int = 30


class CacheSettings(BaseModel):
    dir: str = "./data/cache"
    forecast_ttl_seconds: int = 600
    daylight_ttl_seconds: int = 24 * 3600


class PeakSettings(BaseModel):
    # None -> packaged nh48.csv
    data_path: Optional[str] = None
    default_duration_hours: float = 6.0
    extra_peak_hours: float = 1.0
    durations: Dict[str, float] = Field(default_factory=dict)
    group_aliases: Dict[str, List[str]] = Field(default_factory=dict)
    exposed: List[str] = Field(default_factory=list)


class PlanSettings(BaseModel):
    start_after_sunrise_minutes: int = 30
    finish_before_sunset_minutes: int = 90
    turnaround_fraction: float = Field(0.6, gt=0, le=1)


class RiskSettings(BaseModel):
    window_hours: int = Field(12, ge=1)
    gust_mph: float = 35
    gust_points: int = 2
    exposed_gust_points: int = 3
    apparent_f: float = 10
    cold_points: int = 2
    precip_prob: float = 60
    precip_points: int = 1


class ProviderSettings(BaseModel):
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    sunrise_sunset_url: str = "https://api.sunrise-sunset.org/json"
    max_elevation_ft: float = 10000


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    peaks: PeakSettings = Field(default_factory=PeakSettings)
    plan: PlanSettings = Field(default_factory=PlanSettings)
    risk: RiskSettings = Field(default_factory=RiskSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)

    log_level = os.getenv("HIKING_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    timezone = os.getenv("HIKING_TIMEZONE")
    if timezone:
        data.setdefault("app", {})["timezone"] = timezone

    cache_dir = os.getenv("HIKING_CACHE_DIR")
    if cache_dir:
        data.setdefault("cache", {})["dir"] = cache_dir

    return data


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """Load and validate settings (uncached)."""
    config_path = config_path or os.getenv("HIKING_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    return Settings.model_validate(_apply_env_overrides(raw))


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    return load_settings()
