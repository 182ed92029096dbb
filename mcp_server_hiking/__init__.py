"""mcp_server_hiking package

Purpose:
- Plan a single-day hike on the NH 4000-footers and score its weather risk.
- Expose the planner as MCP tools (official python-sdk / FastMCP) so an LLM agent can call them.

Structure:
- mcp_tools_hiking/core/: schemas, settings, errors, caching
- mcp_tools_hiking/services/: peak resolution, day plan, forecast window, risk, render blocks,
  plus the Open-Meteo / sunrise-sunset.org providers
- mcp_tools_hiking/utils/: pure helpers (name normalization, time parsing)
- mcp_tools_hiking/mcp/: FastMCP server + tool wiring
"""
