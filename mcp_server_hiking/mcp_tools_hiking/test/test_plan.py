from datetime import datetime, timedelta

import pytest

from mcp_server_hiking.mcp_tools_hiking.core.errors import InvalidTimeError
from mcp_server_hiking.mcp_tools_hiking.services.plan import compute_plan


SUNRISE = "2025-07-01T06:00:00-04:00"
SUNSET = "2025-07-01T19:00:00-04:00"


def test_six_hour_day_starts_as_late_as_possible():
    plan = compute_plan(SUNRISE, SUNSET, 6)

    # earliest start 6:30, deadline 5:30 PM, latest start 11:30 -> start 11:30
    assert plan.start == "11:30 AM"
    # 11:30 + 0.6 * 6h = 15:06
    assert plan.turnaround == "3:06 PM"
    assert plan.finish_deadline == "5:30 PM"
    assert plan.start_iso == "2025-07-01T11:30:00-04:00"
    assert plan.turnaround_iso == "2025-07-01T15:06:00-04:00"
    assert plan.finish_deadline_iso == "2025-07-01T17:30:00-04:00"
    assert plan.feasible is True


def test_long_hike_starts_at_earliest_start_and_is_flagged():
    plan = compute_plan(SUNRISE, SUNSET, 12)

    # latest start would be 5:30 AM, before sunrise + 30 min
    assert plan.start == "6:30 AM"
    assert plan.turnaround == "1:42 PM"
    assert plan.finish_deadline == "5:30 PM"
    assert plan.feasible is False


def test_turnaround_is_clamped_to_finish_deadline():
    plan = compute_plan(SUNRISE, SUNSET, 20)
    assert plan.start == "6:30 AM"
    assert plan.turnaround == "5:30 PM"
    assert plan.turnaround_iso == plan.finish_deadline_iso


def test_exact_fit_is_feasible():
    # 11 hours between 6:30 AM and 5:30 PM
    plan = compute_plan(SUNRISE, SUNSET, 11)
    assert plan.start == "6:30 AM"
    assert plan.feasible is True


def test_utc_input_renders_in_local_time():
    # sunrise-sunset.org answers in UTC
    plan = compute_plan("2025-07-01T10:00:00+00:00", "2025-07-01T23:00:00Z", 6)
    assert plan.start == "11:30 AM"
    assert plan.finish_deadline == "5:30 PM"


def test_naive_input_is_read_in_the_local_zone():
    plan = compute_plan("2025-07-01T06:00:00", "2025-07-01T19:00:00", 6)
    assert plan.start_iso == "2025-07-01T11:30:00-04:00"


def test_other_timezone():
    plan = compute_plan("2025-07-01T06:00:00+00:00", "2025-07-01T19:00:00+00:00", 6, timezone="UTC")
    assert plan.start == "11:30 AM"
    assert plan.start_iso == "2025-07-01T11:30:00+00:00"


@pytest.mark.parametrize("duration", [0.5, 1, 2.25, 4, 6, 7.5, 8, 10, 10.99])
def test_start_turnaround_deadline_are_ordered(duration):
    plan = compute_plan(SUNRISE, SUNSET, duration)
    start = datetime.fromisoformat(plan.start_iso)
    turnaround = datetime.fromisoformat(plan.turnaround_iso)
    deadline = datetime.fromisoformat(plan.finish_deadline_iso)

    assert start <= turnaround <= deadline
    assert deadline == datetime.fromisoformat(SUNSET) - timedelta(minutes=90)
    # short enough to fit: start is exactly deadline - duration
    assert start == deadline - timedelta(hours=duration)


@pytest.mark.parametrize("sunrise, sunset", [("not a time", SUNSET), (SUNRISE, ""), (None, SUNSET), (SUNRISE, 1234)])
def test_invalid_timestamps_raise(sunrise, sunset):
    with pytest.raises(InvalidTimeError):
        compute_plan(sunrise, sunset, 6)


def test_invalid_time_error_is_a_value_error():
    with pytest.raises(ValueError, match="sunrise"):
        compute_plan("yesterday-ish", SUNSET, 6)
