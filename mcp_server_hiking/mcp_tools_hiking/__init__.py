"""mcp_tools_hiking package: services and MCP wiring for the hiking planner."""

from .core.errors import InvalidTimeError, NotFoundError, ProviderError  # noqa: F401
from .core.schemas import DayPlan, Peak, PeakGroup, PlanResult, RiskAssessment, RiskReport  # noqa: F401
