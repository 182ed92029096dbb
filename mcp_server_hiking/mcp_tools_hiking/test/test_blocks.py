from mcp_server_hiking.mcp_tools_hiking.core.schemas import (
    DaylightCardBlock,
    ForecastCardBlock,
    RiskBadgeBlock,
)
from mcp_server_hiking.mcp_tools_hiking.services.blocks import normalize_blocks


def test_forecast_rows_give_summit_summary():
    blocks = normalize_blocks(
        [
            {
                "type": "forecast_card",
                "forecast": [
                    {"apparentF": 20, "gustMph": 40, "precipProb": 70},
                    {"apparentF": 15, "gustMph": 30, "precipProb": 50},
                ],
            }
        ]
    )
    (card,) = blocks
    assert isinstance(card, ForecastCardBlock)
    assert card.summit_temp_f == 15
    assert card.summit_wind_gust_mph == 40
    assert card.precip_prob_pct == 70


def test_forecast_rows_override_scalars():
    (card,) = normalize_blocks(
        [
            {
                "type": "forecast_card",
                "summitTempF": 99,
                "summitWindGustMph": 1,
                "forecast": [{"apparentTempF": 12, "windGustMph": "44", "precipProb": None}],
                "precipProbPct": 35,
            }
        ]
    )
    assert card.summit_temp_f == 12
    assert card.summit_wind_gust_mph == 44
    # no usable precip in rows -> scalar
    assert card.precip_prob_pct == 35


def test_forecast_falls_back_to_risk_style_names():
    (card,) = normalize_blocks(
        [{"type": "forecast_card", "minApparentF": 8, "maxGustMph": 52, "maxPrecipProb": 20, "note": "Above treeline"}]
    )
    assert (card.summit_temp_f, card.summit_wind_gust_mph, card.precip_prob_pct) == (8, 52, 20)
    assert card.note == "Above treeline"


def test_forecast_uses_nested_risk_summary_last():
    (card,) = normalize_blocks(
        [{"type": "forecast_card", "summitTempF": 30, "summary": {"minApparentF": 1, "maxGustMph": 41}}]
    )
    assert card.summit_temp_f == 30
    assert card.summit_wind_gust_mph == 41
    assert card.precip_prob_pct is None
    assert card.note is None


def test_daylight_accepts_alternate_spellings():
    (card,) = normalize_blocks(
        [
            {
                "type": "daylight_card",
                "sunRise": "2025-07-01T10:00:00+00:00",
                "sunset": "2025-07-01T23:00:00+00:00",
                "start": "11:30 AM",
                "turn": "3:06 PM",
                "finishDeadline": "5:30 PM",
                "weather": "nice",
            }
        ]
    )
    assert isinstance(card, DaylightCardBlock)
    assert card.model_dump() == {
        "type": "daylight_card",
        "sunriseISO": "2025-07-01T10:00:00+00:00",
        "sunsetISO": "2025-07-01T23:00:00+00:00",
        "startISO": "11:30 AM",
        "turnaroundISO": "3:06 PM",
        "finishDeadlineISO": "5:30 PM",
    }


def test_daylight_canonical_name_has_priority():
    (card,) = normalize_blocks([{"type": "daylight_card", "sunrise": "b", "sunriseISO": "a", "sunRise": "c"}])
    assert card.sunrise_iso == "a"
    assert card.finish_deadline_iso is None


def test_risk_level_is_coerced():
    blocks = normalize_blocks(
        [
            {"type": "risk_badge", "level": "HIGH", "reasons": ["Wind gusts ≥ 35 mph"]},
            {"type": "risk_badge", "level": "extreme", "reasons": "windy"},
            {"type": "risk_badge"},
        ]
    )
    assert [b.level for b in blocks] == ["high", "low", "low"]
    assert [b.reasons for b in blocks] == [["Wind gusts ≥ 35 mph"], [], []]


def test_risk_extra_fields_are_dropped():
    (badge,) = normalize_blocks(
        [{"type": "risk_badge", "level": "moderate", "reasons": ["cold"], "summary": {"maxGustMph": 10}, "exposed": True}]
    )
    assert isinstance(badge, RiskBadgeBlock)
    assert set(badge.model_dump()) == {"type", "level", "reasons"}


def test_unknown_types_dropped_and_order_kept():
    blocks = normalize_blocks(
        [
            {"type": "Risk_Badge", "level": "moderate"},
            {"type": "map"},
            "not a block",
            {"no_type": True},
            {"type": "forecast_card"},
            {"type": " DAYLIGHT_CARD "},
        ]
    )
    assert [b.type for b in blocks] == ["risk_badge", "forecast_card", "daylight_card"]


def test_empty_input():
    assert normalize_blocks([]) == []
    assert normalize_blocks(None) == []
