from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ..core.settings import PeakSettings
from ..utils.names import normalize_peak_name


@dataclass(frozen=True)
class DurationTable:
    """Expected hike duration per peak, with a flat default for unlisted peaks.

    Keys are matched on the normalized name, so "Washington", "Mt. Washington" and
    "Mount Washington" all read the same entry.
    """
    hours_by_peak: Mapping[str, float] = field(default_factory=dict)
    default_hours: float = 6.0

    def __post_init__(self) -> None:
        normalized = {normalize_peak_name(k): float(v) for k, v in self.hours_by_peak.items()}
        object.__setattr__(self, "hours_by_peak", MappingProxyType(normalized))

    @classmethod
    def from_settings(cls, peaks: PeakSettings) -> "DurationTable":
        return cls(hours_by_peak=peaks.durations, default_hours=peaks.default_duration_hours)

    def default_duration_hours(self, peak_name: str) -> float:
        return self.hours_by_peak.get(normalize_peak_name(peak_name), self.default_hours)
