"""Tests for hubspot_summaries.cli — command line interface."""

import json
from unittest.mock import patch

import pytest

from conftest import FakeStore, ms
from hubspot_summaries.cli import main
from hubspot_summaries.config import reset_config
from hubspot_summaries.notes.codec import encode


@pytest.fixture(autouse=True)
def clean_config(clean_env):
    reset_config()
    yield
    reset_config()


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("HUBSPOT_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("SHARED_CONTACT_ID", "501")
    monkeypatch.setenv("SUMMARIES_TIMEZONE", "UTC")


@pytest.fixture
def fake_client():
    """Patch HubSpotClient so CLI commands run against an in-memory store."""
    store = FakeStore()
    store.add("1", ms(2024, 3, 4, 9, 0), encode("Standup", "Nothing new", "Ana"))
    store.add("2", ms(2024, 3, 5, 9, 30), encode("Budget", "Numbers", "Ben"))

    class _Client:
        def __init__(self, config):
            self.config = config

        async def __aenter__(self):
            return store

        async def __aexit__(self, *exc_info):
            return None

    with patch("hubspot_summaries.hubspot.client.HubSpotClient", _Client):
        yield store


class TestCli:
    def test_version(self, capsys):
        rc = main(["version"])
        assert rc == 0
        out = capsys.readouterr().out
        assert "hubspot-summaries" in out
        assert "0.1.0" in out

    def test_version_flag(self, capsys):
        assert main(["--version"]) == 0
        assert "hubspot-summaries" in capsys.readouterr().out

    def test_no_args(self, capsys):
        assert main([]) == 0

    def test_status_incomplete(self, capsys):
        rc = main(["status"])
        assert rc == 1
        out = capsys.readouterr().out
        assert "HUBSPOT_ACCESS_TOKEN" in out
        assert "SHARED_CONTACT_ID" in out

    def test_status_configured(self, capsys, configured):
        rc = main(["status"])
        assert rc == 0
        out = capsys.readouterr().out
        assert "configured" in out
        assert "501" in out


class TestListCommand:
    def test_list_with_filters(self, capsys, configured, fake_client):
        rc = main(["list", "--day", "Tuesday"])
        assert rc == 0
        data = json.loads(capsys.readouterr().out)
        assert [d["engagement"]["id"] for d in data] == ["2"]

    def test_list_limit(self, capsys, configured, fake_client):
        assert main(["list", "--limit", "1"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 1

    def test_list_invalid_day(self, capsys, configured, fake_client):
        rc = main(["list", "--day", "funday"])
        assert rc == 1
        assert "Invalid dayOfWeek" in capsys.readouterr().err

    def test_list_unconfigured(self, capsys, fake_client):
        rc = main(["list"])
        assert rc == 1
        assert "Missing required environment variables" in capsys.readouterr().err
        assert fake_client.calls == []


class TestShowCommand:
    def test_show_decodes(self, capsys, configured, fake_client):
        assert main(["show", "2"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["id"] == "2"
        assert data["title"] == "Budget"
        assert data["author"] == "Ben"

    def test_show_missing(self, capsys, configured, fake_client):
        assert main(["show", "404"]) == 1
        assert "No summary found" in capsys.readouterr().err
