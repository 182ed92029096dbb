from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Sequence

from ..core.schemas import RiskAssessment, RiskLevel, RiskSummary
from ..core.settings import PeakSettings, RiskSettings
from ..utils.names import normalize_peak_name


NO_MAJOR_RISK = "No major weather risks detected."


@dataclass(frozen=True)
class ExposureTable:
    """Peaks on exposed ridges / above treeline, where wind counts for more."""
    names: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", frozenset(normalize_peak_name(n) for n in self.names))

    @classmethod
    def from_settings(cls, peaks: PeakSettings) -> "ExposureTable":
        return cls(names=frozenset(peaks.exposed))

    def is_exposed(self, peak_name: str) -> bool:
        return normalize_peak_name(peak_name) in self.names

    def any_exposed(self, peak_names: Iterable[str]) -> bool:
        return any(self.is_exposed(n) for n in peak_names)


def compute_risk(
    apparent_f: Sequence[Optional[float]],
    gust_mph: Sequence[Optional[float]],
    precip_prob: Sequence[Optional[float]],
    exposed: bool = False,
    settings: Optional[RiskSettings] = None,
) -> RiskAssessment:
    """Overall hiking risk (low/moderate/high) with reasons.

    Points:
      - max gust >= 35 mph         -> 2 (3 if exposed)
      - min apparent temp <= 10 F  -> 2
      - max precip prob >= 60 %    -> 1

    0-1 low, 2 moderate, 3+ high. Thresholds are inclusive. Missing values (None)
    are ignored; an empty series gives None for that summary value.
    """
    cfg = settings or RiskSettings()

    max_gust = _max(gust_mph)
    min_apparent = _min(apparent_f)
    max_precip = _max(precip_prob)

    score = 0
    reasons: List[str] = []

    if max_gust is not None and max_gust >= cfg.gust_mph:
        score += cfg.exposed_gust_points if exposed else cfg.gust_points
        reasons.append(f"Wind gusts ≥ {cfg.gust_mph:g} mph" + (" (exposed ridge)" if exposed else ""))

    if min_apparent is not None and min_apparent <= cfg.apparent_f:
        score += cfg.cold_points
        reasons.append(f"Apparent temperature ≤ {cfg.apparent_f:g}°F")

    if max_precip is not None and max_precip >= cfg.precip_prob:
        score += cfg.precip_points
        reasons.append(f"Precipitation probability ≥ {cfg.precip_prob:g}%")

    return RiskAssessment(
        level=risk_level(score),
        reasons=reasons or [NO_MAJOR_RISK],
        summary=RiskSummary(
            max_gust_mph=max_gust,
            min_apparent_f=min_apparent,
            max_precip_prob=max_precip,
        ),
    )


def risk_level(score: int) -> RiskLevel:
    if score >= 3:
        return "high"
    if score == 2:
        return "moderate"
    return "low"


def _numbers(values: Sequence[Optional[float]]) -> List[float]:
    out: List[float] = []
    for v in values or []:
        if v is None or isinstance(v, bool):
            continue
        f = float(v)
        if math.isfinite(f):
            out.append(f)
    return out


def _max(values: Sequence[Optional[float]]) -> Optional[float]:
    nums = _numbers(values)
    return max(nums) if nums else None


def _min(values: Sequence[Optional[float]]) -> Optional[float]:
    nums = _numbers(values)
    return min(nums) if nums else None
