import json
import os

import pytest

from mcp_server_hiking.mcp_tools_hiking.core.cache import FileCache
from mcp_server_hiking.mcp_tools_hiking.core.settings import get_settings, load_settings


def test_packaged_defaults(settings):
    assert settings.app.timezone == "America/New_York"
    assert settings.peaks.default_duration_hours == 6
    assert settings.peaks.durations["Mount Adams"] == 7.5
    assert settings.peaks.group_aliases["the bonds"] == ["Bondcliff", "Bond", "West Bond"]
    assert "Cannon Mountain" in settings.peaks.exposed
    assert settings.plan.finish_before_sunset_minutes == 90
    assert settings.risk.window_hours == 12


def test_config_path_replaces_defaults(monkeypatch, tmp_path):
    path = tmp_path / "hiking.yaml"
    path.write_text("app:\n  timezone: America/Denver\nrisk:\n  gust_mph: 40\n", encoding="utf-8")
    monkeypatch.setenv("HIKING_CONFIG_PATH", str(path))

    settings = get_settings()

    assert settings.app.timezone == "America/Denver"
    assert settings.risk.gust_mph == 40
    # sections missing from the file fall back to model defaults
    assert settings.plan.start_after_sunrise_minutes == 30
    assert get_settings() is settings


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.delenv("HIKING_CONFIG_PATH", raising=False)
    monkeypatch.setenv("HIKING_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("HIKING_CACHE_DIR", str(tmp_path / "cache"))
    settings = load_settings()
    assert settings.app.log_level == "DEBUG"
    assert settings.cache.dir == str(tmp_path / "cache")


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_settings(path)


def test_cache_roundtrip_and_expiry(tmp_path, monkeypatch):
    cache = FileCache(str(tmp_path), ttl_seconds=60)
    now = 1_000_000.0
    monkeypatch.setattr("mcp_server_hiking.mcp_tools_hiking.core.cache.time.time", lambda: now)

    cache.set("k", {"a": 1})
    assert cache.get("k") == {"a": 1}
    assert cache.get("missing") is None

    now += 61
    assert cache.get("k") is None
    assert cache.get("k", ttl_seconds=120) == {"a": 1}


def test_cache_ignores_corrupt_entries(tmp_path):
    cache = FileCache(str(tmp_path))
    cache.set("k", {"a": 1})
    (path,) = [os.path.join(tmp_path, f) for f in os.listdir(tmp_path)]
    with open(path, "w", encoding="utf-8") as f:
        f.write("{not json")
    assert cache.get("k") is None


def test_cache_entries_are_json_envelopes(tmp_path):
    cache = FileCache(str(tmp_path))
    cache.set("k", {"a": 1})
    (name,) = os.listdir(tmp_path)
    with open(os.path.join(tmp_path, name), encoding="utf-8") as f:
        envelope = json.load(f)
    assert envelope["value"] == {"a": 1}
    assert "_cached_at" in envelope


def test_disabled_cache_does_nothing(tmp_path):
    cache = FileCache(str(tmp_path / "never"), enabled=False)
    cache.set("k", {"a": 1})
    assert cache.get("k") is None
    assert not (tmp_path / "never").exists()
