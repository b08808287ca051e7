"""
HubSpot engagements API client — the record store for summary notes.

Wraps httpx.AsyncClient around the v1 engagements endpoints. Every method is
a single round trip: no retries, no pagination cursor, no caching.

Usage:
    from hubspot_summaries.config import get_config
    from hubspot_summaries.hubspot.client import HubSpotClient

    async with HubSpotClient(get_config().hubspot) as client:
        records = await client.list_page(100)
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from hubspot_summaries.config import HubSpotConfig
from hubspot_summaries.errors import ConfigurationError, HttpError, NotFoundError
from hubspot_summaries.notes.models import SummaryRecord

logger = logging.getLogger(__name__)

ENGAGEMENTS_PATH = "/engagements/v1/engagements"


class HubSpotClient:
    """Async client for HubSpot NOTE engagements."""

    def __init__(
        self,
        config: HubSpotConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"Authorization": f"Bearer {config.access_token}"},
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> HubSpotClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ─── Record store operations ─────────────────────────────────────

    async def list_page(self, max_count: int = 100) -> list[SummaryRecord]:
        """GET /engagements/paged — one page, newest-first order not guaranteed."""
        resp = await self._client.get(f"{ENGAGEMENTS_PATH}/paged", params={"limit": max_count})
        data = _check(resp)
        results = data.get("results") or []
        logger.info("Retrieved %d engagements from HubSpot", len(results))
        return [SummaryRecord.from_engagement(item) for item in results]

    async def get_by_id(self, record_id: str) -> SummaryRecord:
        resp = await self._client.get(f"{ENGAGEMENTS_PATH}/{record_id}")
        if resp.status_code == 404:
            raise NotFoundError(f"No summary found with Engagement ID {record_id}.")
        return SummaryRecord.from_engagement(_check(resp))

    async def create(self, body: str, contact_id: str) -> str:
        """POST a NOTE engagement associated with ``contact_id``. Returns its id."""
        payload = {
            "engagement": {"active": True, "type": "NOTE", "timestamp": _now_ms()},
            "associations": {"contactIds": [_contact_id(contact_id)]},
            "metadata": {"body": body},
        }
        resp = await self._client.post(ENGAGEMENTS_PATH, json=payload)
        data = _check(resp)
        return str(data["engagement"]["id"])

    async def update_body(self, record_id: str, body: str) -> None:
        resp = await self._client.put(
            f"{ENGAGEMENTS_PATH}/{record_id}", json={"metadata": {"body": body}}
        )
        _check(resp)

    async def delete(self, record_id: str) -> None:
        resp = await self._client.delete(f"{ENGAGEMENTS_PATH}/{record_id}")
        _check(resp)


# ─── Helpers ─────────────────────────────────────────────────────────


def _check(resp: httpx.Response) -> dict[str, Any]:
    """Return the JSON body of a success response, else raise HttpError."""
    if not resp.is_success:
        message = _error_message(resp)
        logger.error("HubSpot API error: HTTP-Code: %d, Message: %s", resp.status_code, message)
        raise HttpError(resp.status_code, message)
    if not resp.content:
        return {}
    return dict(resp.json())


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.text or resp.reason_phrase


def _contact_id(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            ["SHARED_CONTACT_ID"], f"SHARED_CONTACT_ID must be numeric, got {value!r}"
        ) from None


def _now_ms() -> int:
    return int(time.time() * 1000)
