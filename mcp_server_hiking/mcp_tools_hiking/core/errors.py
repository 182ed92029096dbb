from __future__ import annotations

"""Error types raised by the planning tools.

FastMCP turns any exception raised inside a tool into a tool error, so these only
need a clear message. The extra attributes are for callers that use the services
directly (tests, notebooks).
"""

from typing import Any, Optional


class NotFoundError(ValueError):
    """A requested peak name has no match in the reference data."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Peak not found: {name}")
        self.name = name


class InvalidTimeError(ValueError):
    """A sunrise/sunset value could not be parsed into an instant."""

    def __init__(self, value: Any, field: Optional[str] = None) -> None:
        label = f"{field} " if field else ""
        super().__init__(f"Invalid {label}timestamp: {value!r}")
        self.value = value
        self.field = field


class ProviderError(RuntimeError):
    """An upstream weather/daylight service returned an error."""

    def __init__(self, service: str, status_code: int, reason: Optional[str] = None) -> None:
        extra = f" Reason: {reason}" if reason else ""
        super().__init__(f"{service} request failed ({status_code}).{extra}")
        self.service = service
        self.status_code = status_code
        self.reason = reason
