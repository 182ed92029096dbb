import pytest

from mcp_server_hiking.mcp_tools_hiking.core.settings import get_settings, load_settings
from mcp_server_hiking.mcp_tools_hiking.services.toolkit import HikingToolkit


@pytest.fixture
def settings(monkeypatch):
    # packaged defaults only, whatever the developer has exported
    for name in ("HIKING_CONFIG_PATH", "HIKING_LOG_LEVEL", "HIKING_CACHE_DIR", "HIKING_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)
    return load_settings()


@pytest.fixture
def toolkit(settings):
    return HikingToolkit.from_settings(settings, cache_enabled=False)


@pytest.fixture
def resolver(toolkit):
    return toolkit.resolver


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeResponse:
    """Just enough of requests.Response for the providers."""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload
