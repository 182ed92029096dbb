import asyncio

import pytest

from mcp_server_hiking.mcp_tools_hiking.mcp import server


@pytest.fixture(autouse=True)
def _fresh_toolkit(settings):
    server.toolkit.cache_clear()
    yield
    server.toolkit.cache_clear()


def test_tools_are_registered():
    tools = asyncio.run(server.mcp.list_tools())
    assert {t.name for t in tools} == {
        "get_peak_by_name",
        "get_daylight",
        "get_forecast",
        "compute_plan",
        "compute_risk",
        "render_blocks",
    }


def test_get_peak_by_name_tool():
    group = server.get_peak_by_name("Washington and Adams")
    assert [p.name for p in group.peaks] == ["Mount Washington", "Mount Adams"]
    assert group.combined_duration_hours == 9


def test_compute_plan_tool():
    plan = server.compute_plan("Mount Tom", "2025-07-01T10:00:00+00:00", "2025-07-01T23:00:00+00:00", 6)
    assert (plan.start, plan.turnaround, plan.finish_deadline) == ("11:30 AM", "3:06 PM", "5:30 PM")


def test_compute_risk_tool_with_stale_series():
    # every stamp is in the past, so the window starts at index 0
    times = ["2020-01-01T%02d:00:00+00:00" % h for h in range(3)]
    report = server.compute_risk("Mount Washington", times, [5, 5, 5], [50, 10, 10], [0, 0, 0])
    assert report.level == "high"
    assert report.exposed is True


def test_render_blocks_tool():
    result = server.render_blocks([{"type": "risk_badge", "level": "low"}, {"type": "unknown"}])
    assert [b.type for b in result.blocks] == ["risk_badge"]
