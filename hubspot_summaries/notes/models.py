"""
Summary record shape — converts raw HubSpot engagement JSON.

Usage:
    from hubspot_summaries.notes.models import SummaryRecord

    record = SummaryRecord.from_engagement(resp.json())
    record.created_at()   # aware datetime in server local time
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from typing import Any


@dataclass(frozen=True)
class SummaryRecord:
    """One stored note as the record store returns it."""

    id: str
    created_at_ms: int
    body: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_engagement(cls, data: dict[str, Any]) -> SummaryRecord:
        """Build from an engagement object ({engagement: {...}, metadata: {...}})."""
        engagement = data.get("engagement") or {}
        metadata = data.get("metadata") or {}
        return cls(
            id=str(engagement["id"]),
            created_at_ms=int(engagement.get("timestamp") or engagement.get("createdAt") or 0),
            body=metadata.get("body") or "",
            raw=data,
        )

    def created_at(self, tz: tzinfo | None = None) -> datetime:
        """Creation instant; ``tz=None`` converts to server local time."""
        return datetime.fromtimestamp(self.created_at_ms / 1000, tz=UTC).astimezone(tz)

    def to_dict(self) -> dict[str, Any]:
        """The raw engagement JSON, or a minimal equivalent when there is none."""
        if self.raw:
            return self.raw
        return {
            "engagement": {"id": self.id, "type": "NOTE", "timestamp": self.created_at_ms},
            "metadata": {"body": self.body},
        }
