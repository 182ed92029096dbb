from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


RiskLevel = Literal["low", "moderate", "high"]


class WireModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire (tool output / JSON)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
    )


class Peak(WireModel):
    """One summit from the reference data."""
    model_config = ConfigDict(frozen=True)

    name: str
    elevation_ft: float = Field(..., ge=0)
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class PeakGroup(WireModel):
    """Resolved peak request: one or more peaks hiked in a single outing."""
    model_config = ConfigDict(frozen=True)

    peaks: Tuple[Peak, ...] = Field(..., min_length=1)
    combined_duration_hours: float


class DaylightWindow(WireModel):
    """Sunrise/sunset instants for one date and location (ISO-8601 with offset)."""
    sunrise_iso: str = Field(..., alias="sunriseISO")
    sunset_iso: str = Field(..., alias="sunsetISO")


class PlanResult(WireModel):
    """Start / turnaround / finish-deadline for one hiking day.

    The plain fields are display strings in the local zone (e.g. "11:30 AM"); the
    *_iso fields carry the same instants for callers that need to compare them.
    `feasible` is False when the hike does not fit between the start margin and the
    finish deadline; the times are still returned so the caller can show them.
    """
    start: str
    turnaround: str
    finish_deadline: str
    start_iso: str = Field(..., alias="startISO")
    turnaround_iso: str = Field(..., alias="turnaroundISO")
    finish_deadline_iso: str = Field(..., alias="finishDeadlineISO")
    feasible: bool = True


class DayPlan(PlanResult):
    """PlanResult plus the duration that was actually used."""
    used_duration_hours: float


class ForecastSeries(WireModel):
    """Hourly forecast arrays (Open-Meteo hourly fields, imperial units)."""
    time: List[str] = Field(default_factory=list)
    temperature_f: List[Optional[float]] = Field(default_factory=list)
    apparent_temp_f: List[Optional[float]] = Field(default_factory=list)
    wind_mph: List[Optional[float]] = Field(default_factory=list)
    gust_mph: List[Optional[float]] = Field(default_factory=list)
    precip_prob: List[Optional[float]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _parallel_arrays(self) -> "ForecastSeries":
        n = len(self.time)
        for name in ("temperature_f", "apparent_temp_f", "wind_mph", "gust_mph", "precip_prob"):
            values = getattr(self, name)
            # Missing upstream fields come back empty; anything else must line up with `time`.
            if values and len(values) != n:
                raise ValueError(f"{name} has {len(values)} values, expected {n}")
        return self


class RiskSummary(WireModel):
    max_gust_mph: Optional[float] = None
    min_apparent_f: Optional[float] = None
    max_precip_prob: Optional[float] = None


class RiskAssessment(WireModel):
    level: RiskLevel
    reasons: List[str]
    summary: RiskSummary


class RiskReport(RiskAssessment):
    """RiskAssessment plus whether the peak counted as exposed."""
    exposed: bool


# ---------------------------------------------------------------------------
# Render blocks (display cards)
# ---------------------------------------------------------------------------

class DaylightCardBlock(WireModel):
    type: Literal["daylight_card"] = "daylight_card"
    sunrise_iso: Optional[str] = Field(None, alias="sunriseISO")
    sunset_iso: Optional[str] = Field(None, alias="sunsetISO")
    start_iso: Optional[str] = Field(None, alias="startISO")
    turnaround_iso: Optional[str] = Field(None, alias="turnaroundISO")
    finish_deadline_iso: Optional[str] = Field(None, alias="finishDeadlineISO")


class RiskBadgeBlock(WireModel):
    type: Literal["risk_badge"] = "risk_badge"
    level: RiskLevel = "low"
    reasons: List[str] = Field(default_factory=list)


class ForecastCardBlock(WireModel):
    type: Literal["forecast_card"] = "forecast_card"
    summit_temp_f: Optional[float] = None
    summit_wind_gust_mph: Optional[float] = None
    precip_prob_pct: Optional[float] = None
    note: Optional[str] = None


RenderBlock = Annotated[
    Union[DaylightCardBlock, RiskBadgeBlock, ForecastCardBlock],
    Field(discriminator="type"),
]


class RenderBlocks(WireModel):
    blocks: List[RenderBlock] = Field(default_factory=list)
