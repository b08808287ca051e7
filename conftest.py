"""
Root-level shared test fixtures.

Provides an in-memory record store with the same async interface as
HubSpotClient, timestamp helpers, and environment isolation.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from hubspot_summaries.errors import NotFoundError
from hubspot_summaries.notes.models import SummaryRecord
from hubspot_summaries.notes.service import SummaryService


def ms(year, month, day, hour=12, minute=0) -> int:
    """Millisecond epoch for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=UTC).timestamp() * 1000)


class FakeStore:
    """In-memory record store. Records are kept in insertion order."""

    def __init__(self, records: list[SummaryRecord] | None = None) -> None:
        self.records: dict[str, SummaryRecord] = {r.id: r for r in records or []}
        self.calls: list[tuple] = []
        self.next_id = 1000
        self.clock = ms(2024, 3, 1)

    def add(self, record_id: str, created_at_ms: int, body: str) -> SummaryRecord:
        record = SummaryRecord(id=record_id, created_at_ms=created_at_ms, body=body)
        self.records[record_id] = record
        return record

    async def list_page(self, max_count: int = 100) -> list[SummaryRecord]:
        self.calls.append(("list_page", max_count))
        return list(self.records.values())[:max_count]

    async def get_by_id(self, record_id: str) -> SummaryRecord:
        self.calls.append(("get_by_id", record_id))
        if record_id not in self.records:
            raise NotFoundError(f"No summary found with Engagement ID {record_id}.")
        return self.records[record_id]

    async def create(self, body: str, contact_id: str) -> str:
        self.calls.append(("create", body, contact_id))
        self.next_id += 1
        self.clock += 60_000
        record_id = str(self.next_id)
        self.add(record_id, self.clock, body)
        return record_id

    async def update_body(self, record_id: str, body: str) -> None:
        self.calls.append(("update_body", record_id, body))
        old = self.records[record_id]
        self.records[record_id] = SummaryRecord(id=old.id, created_at_ms=old.created_at_ms, body=body)

    async def delete(self, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        self.records.pop(record_id, None)

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def store():
    """An empty in-memory record store."""
    return FakeStore()


@pytest.fixture
def service(store):
    """SummaryService over the in-memory store, filtering in UTC."""
    return SummaryService(store, contact_id="501", page_size=100, tz=UTC)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove env vars that leak between tests and skip .env loading."""
    for key in [
        "HUBSPOT_ACCESS_TOKEN",
        "SHARED_CONTACT_ID",
        "HUBSPOT_BASE_URL",
        "HUBSPOT_TIMEOUT",
        "HUBSPOT_PAGE_SIZE",
        "SUMMARIES_TIMEZONE",
        "SUMMARIES_LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("hubspot_summaries.config.load_dotenv", lambda *a, **kw: False)
