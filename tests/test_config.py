"""Tests for hubspot_summaries.config — centralized configuration."""

from zoneinfo import ZoneInfo

import pytest

from hubspot_summaries.config import Config, HubSpotConfig, get_config, reset_config
from hubspot_summaries.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_config(clean_env):
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


class TestHubSpotConfig:
    def test_defaults(self):
        cfg = HubSpotConfig()
        assert cfg.base_url == "https://api.hubapi.com"
        assert cfg.timeout == 30.0
        assert cfg.page_size == 100

    def test_missing_both(self):
        assert HubSpotConfig().missing() == ["HUBSPOT_ACCESS_TOKEN", "SHARED_CONTACT_ID"]

    def test_missing_none(self):
        assert HubSpotConfig(access_token="t", contact_id="1").missing() == []

    def test_require_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            HubSpotConfig(access_token="t").require()
        assert exc_info.value.missing == ["SHARED_CONTACT_ID"]
        assert "SHARED_CONTACT_ID" in str(exc_info.value)

    def test_frozen(self):
        cfg = HubSpotConfig()
        with pytest.raises(AttributeError):
            cfg.access_token = "other"  # type: ignore[misc]


class TestConfig:
    def test_server_local_by_default(self):
        assert Config().tzinfo is None

    def test_named_zone(self):
        assert Config(timezone="Europe/Berlin").tzinfo == ZoneInfo("Europe/Berlin")


class TestLoadFromEnv:
    def test_defaults(self):
        cfg = get_config()
        assert cfg.hubspot.access_token == ""
        assert cfg.hubspot.contact_id == ""
        assert cfg.timezone == ""
        assert cfg.log_level == "INFO"

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("HUBSPOT_ACCESS_TOKEN", "pat-na1-xyz")
        monkeypatch.setenv("SHARED_CONTACT_ID", "501")
        monkeypatch.setenv("HUBSPOT_BASE_URL", "https://hubspot.test/")
        monkeypatch.setenv("HUBSPOT_TIMEOUT", "5")
        monkeypatch.setenv("HUBSPOT_PAGE_SIZE", "50")
        monkeypatch.setenv("SUMMARIES_TIMEZONE", "UTC")
        monkeypatch.setenv("SUMMARIES_LOG_LEVEL", "debug")

        cfg = get_config()
        assert cfg.hubspot.access_token == "pat-na1-xyz"
        assert cfg.hubspot.contact_id == "501"
        assert cfg.hubspot.base_url == "https://hubspot.test"
        assert cfg.hubspot.timeout == 5.0
        assert cfg.hubspot.page_size == 50
        assert cfg.timezone == "UTC"
        assert cfg.log_level == "DEBUG"

    def test_singleton(self):
        assert get_config() is get_config()

    def test_reset(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("SHARED_CONTACT_ID", "9")
        reset_config()
        second = get_config()
        assert first is not second
        assert second.hubspot.contact_id == "9"
