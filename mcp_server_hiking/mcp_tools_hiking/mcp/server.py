"""MCP server (official python-sdk) exposing the hiking planner tools.

This uses FastMCP from the official MCP Python SDK:
- Tools are ordinary Python functions decorated with @mcp.tool().
- Schemas are derived automatically from type hints / Pydantic models.
- Transport (stdio, streamable HTTP) is chosen on the command line.
"""

from __future__ import annotations

import sys
import argparse
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional

import uvicorn
from mcp.server.fastmcp import FastMCP

from ..core.schemas import DaylightWindow, DayPlan, ForecastSeries, PeakGroup, RenderBlocks, RiskReport
from ..core.settings import get_settings
from ..services.toolkit import HikingToolkit


INSTRUCTIONS = """\
Tools for planning a day hike on the New Hampshire 4000-footers.
Typical order: get_peak_by_name -> get_daylight -> get_forecast -> compute_plan ->
compute_risk -> render_blocks (one daylight_card, one risk_badge, one forecast_card).
Dates are YYYY-MM-DD.
"""


# ---------------------------------------------------------------------------
# MCP-Server & Tools
# ---------------------------------------------------------------------------

mcp = FastMCP(name="hiking-planner", instructions=INSTRUCTIONS, stateless_http=False)

logger = logging.getLogger("hiking-planner-mcp")


@lru_cache
def toolkit() -> HikingToolkit:
    """Reference data and tables are built once per process."""
    return HikingToolkit.from_settings(get_settings())


@mcp.tool()
def get_peak_by_name(name: str) -> PeakGroup:
    """Look up lat, lon and elevation for a named NH 4000-footer.

    Accepts nicknames ("the Bonds", "Franconia Ridge", "Presidential Range") and
    lists ("Washington and Adams"); returns every peak plus a combined duration.
    """
    logger.info("get_peak_by_name(%r)", name)
    return toolkit().resolve_peak(name)


@mcp.tool()
def get_daylight(lat: float, lon: float, date: str) -> DaylightWindow:
    """Get sunrise/sunset (ISO-8601, UTC) for a lat, lon and date (YYYY-MM-DD)."""
    logger.info("get_daylight(%.4f, %.4f, %s)", lat, lon, date)
    return toolkit().get_daylight(lat, lon, date)


@mcp.tool()
def get_forecast(lat: float, lon: float, elevation: Optional[float] = None) -> ForecastSeries:
    """Get the hourly forecast for a lat, lon and summit elevation (ft).

    Returns parallel arrays: time, temperatureF, apparentTempF, windMph, gustMph, precipProb.
    """
    logger.info("get_forecast(%.4f, %.4f, %s)", lat, lon, elevation)
    return toolkit().get_forecast(lat, lon, elevation)


@mcp.tool()
def compute_plan(
    peak_name: str,
    sunrise_iso: str,
    sunset_iso: str,
    duration_hours: Optional[float] = None,
) -> DayPlan:
    """Compute start / turnaround / finish deadline from sunrise and sunset.

    Uses the peak's default duration unless the user explicitly gave one
    (duration_hours). `feasible` is false when the hike does not fit in daylight.
    """
    logger.info("compute_plan(%r, duration=%s)", peak_name, duration_hours)
    return toolkit().plan_day(peak_name, sunrise_iso, sunset_iso, duration_hours)


@mcp.tool()
def compute_risk(
    peak_name: str,
    times_iso: List[str],
    apparent_f: List[Optional[float]],
    gust_mph: List[Optional[float]],
    precip_prob: List[Optional[float]],
    window_hours: Optional[int] = None,
) -> RiskReport:
    """Compute risk (low/moderate/high) and reasons from the next hours of summit forecast.

    window_hours defaults to 12.
    """
    logger.info("compute_risk(%r, %d hours of data)", peak_name, len(times_iso))
    return toolkit().score_risk(
        peak_name,
        times_iso,
        apparent_f,
        gust_mph,
        precip_prob,
        window_hours=window_hours,
        now=datetime.now(timezone.utc),
    )


@mcp.tool()
def render_blocks(blocks: List[Dict[str, Any]]) -> RenderBlocks:
    """Render structured UI cards: daylight_card, risk_badge, forecast_card.

    Field names are forgiving (e.g. sunrise / sunriseISO); unknown block types are dropped.
    """
    result = toolkit().render_blocks(blocks)
    logger.info("render_blocks: %s", [b.type for b in result.blocks])
    return result


# ---------------------------------------------------------------------------
# ASGI app for streamable HTTP & entry point
# ---------------------------------------------------------------------------

# the MCP endpoint is /mcp
starlette_app = mcp.streamable_http_app()


def main() -> None:
    """Start the hiking-planner MCP server (streamable HTTP via Uvicorn, or stdio)."""
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--transport", choices=["streamable-http", "stdio"], default="streamable-http")
    args = parser.parse_args()

    settings = get_settings()
    # stderr only: stdout carries the protocol in stdio mode
    logging.basicConfig(stream=sys.stderr, level=settings.app.log_level.upper())

    if args.transport == "stdio":
        logger.info("Starting hiking-planner MCP server (stdio)")
        mcp.run(transport="stdio")
        return

    logger.info(
        "Starting hiking-planner MCP server (streamable-http) on http://%s:%d/mcp …",
        args.host,
        args.port,
    )

    uvicorn.run(
        starlette_app,
        host=args.host,
        port=args.port,
        reload=False,
        loop="asyncio",
    )


if __name__ == "__main__":
    main()
