"""
Summary note operations — create, list, update, delete.

Ties the codec, filter engine, resolver and merge policy to a record store.
Every operation is a short sequence of awaited round trips; nothing is
cached between calls.

Usage:
    from hubspot_summaries.notes.service import SummaryService

    service = SummaryService(client, contact_id="12345")
    note_id = await service.create_summary("Standup", "Shipped v2", "Ana")
    await service.update_summary(query="standup", summary="Shipped v2.1")
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import TYPE_CHECKING

from hubspot_summaries.errors import ValidationError
from hubspot_summaries.notes.codec import decode, encode, encode_fields
from hubspot_summaries.notes.filters import FilterCriteria, apply_filters
from hubspot_summaries.notes.merge import merge_fields
from hubspot_summaries.notes.models import SummaryRecord
from hubspot_summaries.notes.resolver import (
    DEFAULT_PAGE_SIZE,
    resolve_delete_targets,
    resolve_update_target,
)

if TYPE_CHECKING:
    from hubspot_summaries.config import Config
    from hubspot_summaries.hubspot.client import HubSpotClient

logger = logging.getLogger(__name__)


class SummaryService:
    """The four summary note operations over one record store."""

    def __init__(
        self,
        store: HubSpotClient,
        contact_id: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        tz: tzinfo | None = None,
    ) -> None:
        self.store = store
        self.contact_id = contact_id
        self.page_size = page_size
        self.tz = tz

    @classmethod
    def from_config(cls, store: HubSpotClient, config: Config) -> SummaryService:
        return cls(
            store,
            contact_id=config.hubspot.contact_id,
            page_size=config.hubspot.page_size,
            tz=config.tzinfo,
        )

    async def create_summary(self, title: str, summary: str, author: str) -> str:
        missing = [
            name
            for name, value in (("title", title), ("summary", summary), ("author", author))
            if not value
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        logger.info("Creating shared summary with title: %r", title)
        record_id = await self.store.create(encode(title, summary, author), self.contact_id)
        logger.info("Summary created. Engagement ID: %s", record_id)
        return record_id

    async def list_summaries(self, criteria: FilterCriteria | None = None) -> list[SummaryRecord]:
        criteria = criteria or FilterCriteria()
        criteria.validate()
        records = await self.store.list_page(self.page_size)
        results = apply_filters(records, criteria, tz=self.tz)
        logger.info("Returning %d of %d summaries", len(results), len(records))
        return results

    async def get_summary(self, record_id: str) -> SummaryRecord:
        return await self.store.get_by_id(record_id)

    async def update_summary(
        self,
        record_id: str | None = None,
        query: str | None = None,
        title: str | None = None,
        summary: str | None = None,
        author: str | None = None,
    ) -> str:
        """Merge the given fields into an existing note. Returns its id."""
        target_id = await resolve_update_target(
            self.store, record_id=record_id, query=query, page_size=self.page_size
        )
        current = await self.store.get_by_id(target_id)
        merged = merge_fields(decode(current.body), title=title, summary=summary, author=author)
        await self.store.update_body(target_id, encode_fields(merged))
        logger.info("Summary updated. Engagement ID: %s", target_id)
        return target_id

    async def delete_summary(
        self,
        record_id: str | None = None,
        criteria: FilterCriteria | None = None,
    ) -> str:
        """Delete one note. Returns the id actually deleted.

        When the filters resolve several candidates only the most recent one
        is deleted.
        """
        candidates = await resolve_delete_targets(
            self.store,
            record_id=record_id,
            criteria=criteria,
            page_size=self.page_size,
            tz=self.tz,
        )
        target_id = candidates[0]
        await self.store.delete(target_id)
        logger.info("Summary deleted. Engagement ID: %s", target_id)
        return target_id
