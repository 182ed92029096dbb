from __future__ import annotations

"""Tool-level operations.

`HikingToolkit` bundles the immutable reference objects built once from settings
(peak catalog, durations, exposure table, resolver) and exposes one method per MCP
tool. The server module only adapts arguments; everything here is callable and
testable without an MCP runtime.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone as dt_timezone
from typing import Any, List, Optional, Sequence

from ..core.cache import FileCache
from ..core.errors import NotFoundError
from ..core.schemas import DaylightWindow, DayPlan, ForecastSeries, PeakGroup, RenderBlocks, RiskReport
from ..core.settings import Settings
from .blocks import normalize_blocks
from .daylight import get_daylight_window
from .durations import DurationTable
from .forecast_window import slice_next_hours
from .peaks import PeakCatalog, PeakResolver
from .plan import compute_plan
from .risk import ExposureTable, compute_risk
from .weather import get_hourly_forecast


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HikingToolkit:
    settings: Settings
    resolver: PeakResolver
    exposure: ExposureTable
    cache_enabled: bool = True

    @classmethod
    def from_settings(cls, settings: Settings, catalog: Optional[PeakCatalog] = None, cache_enabled: bool = True) -> "HikingToolkit":
        return cls(
            settings=settings,
            resolver=PeakResolver.from_settings(settings.peaks, catalog=catalog),
            exposure=ExposureTable.from_settings(settings.peaks),
            cache_enabled=cache_enabled,
        )

    @property
    def durations(self) -> DurationTable:
        return self.resolver.durations

    # -- core operations ---------------------------------------------------

    def resolve_peak(self, name: str) -> PeakGroup:
        group = self.resolver.resolve(name)
        logger.info(
            "Resolved %r -> %s (%.1f h)",
            name,
            [p.name for p in group.peaks],
            group.combined_duration_hours,
        )
        return group

    def plan_day(
        self,
        peak_name: str,
        sunrise_iso: str,
        sunset_iso: str,
        duration_hours: Optional[float] = None,
    ) -> DayPlan:
        """Day plan for a peak request; an explicit duration overrides the lookup."""
        if duration_hours is not None:
            used = float(duration_hours)
        else:
            # flat per-name lookup; callers pass a group's combined duration explicitly
            used = self.durations.default_duration_hours(peak_name)
        plan = compute_plan(
            sunrise_iso,
            sunset_iso,
            used,
            settings=self.settings.plan,
            timezone=self.settings.app.timezone,
        )
        if not plan.feasible:
            logger.info("Plan for %r does not fit in daylight (%.1f h)", peak_name, used)
        return DayPlan(**plan.model_dump(by_alias=False), used_duration_hours=used)

    def score_risk(
        self,
        peak_name: str,
        times_iso: Sequence[str],
        apparent_f: Sequence[Optional[float]],
        gust_mph: Sequence[Optional[float]],
        precip_prob: Sequence[Optional[float]],
        window_hours: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> RiskReport:
        """Risk over the next `window_hours` of forecast from `now` (default: current time)."""
        exposed = self.is_exposed(peak_name)
        window = slice_next_hours(
            list(times_iso),
            {"apparent_f": list(apparent_f), "gust_mph": list(gust_mph), "precip_prob": list(precip_prob)},
            now=now or datetime.now(dt_timezone.utc),
            hours=window_hours if window_hours is not None else self.settings.risk.window_hours,
            timezone=self.settings.app.timezone,
        )
        risk = compute_risk(
            window["apparent_f"],
            window["gust_mph"],
            window["precip_prob"],
            exposed=exposed,
            settings=self.settings.risk,
        )
        return RiskReport(**risk.model_dump(by_alias=False), exposed=exposed)

    def render_blocks(self, blocks: Sequence[Any]) -> RenderBlocks:
        normalized = normalize_blocks(blocks)
        logger.debug("render_blocks: %d in, %d kept", len(blocks or []), len(normalized))
        return RenderBlocks(blocks=normalized)

    # -- collaborators (HTTP) ----------------------------------------------

    def get_daylight(self, lat: float, lon: float, day: str) -> DaylightWindow:
        cache = self._cache(self.settings.cache.daylight_ttl_seconds)
        return get_daylight_window(
            lat,
            lon,
            day,
            cache=cache,
            timeout_s=self.settings.app.http_timeout_seconds,
            base_url=self.settings.providers.sunrise_sunset_url,
        )

    def get_forecast(self, lat: float, lon: float, elevation_ft: Optional[float] = None) -> ForecastSeries:
        cache = self._cache(self.settings.cache.forecast_ttl_seconds)
        return get_hourly_forecast(
            lat,
            lon,
            elevation_ft,
            cache=cache,
            timeout_s=self.settings.app.http_timeout_seconds,
            base_url=self.settings.providers.forecast_url,
            timezone=self.settings.app.timezone,
            max_elevation_ft=self.settings.providers.max_elevation_ft,
        )

    # -- helpers -----------------------------------------------------------

    def is_exposed(self, peak_name: str) -> bool:
        """Exposed if any peak of the resolved request is; falls back to the bare name."""
        try:
            names: List[str] = [p.name for p in self.resolver.resolve(peak_name).peaks]
        except NotFoundError:
            names = [peak_name]
        return self.exposure.any_exposed(names)

    def _cache(self, ttl_seconds: int) -> Optional[FileCache]:
        if not self.cache_enabled:
            return None
        return FileCache(self.settings.cache.dir, ttl_seconds=ttl_seconds)
