"""
Candidate resolver — turns ambiguous selection input into record ids.

An explicit id is always used as-is, without touching the store. Otherwise
one fresh page is fetched and narrowed with the filter engine; only the most
recent ~page_size records are ever candidates.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import TYPE_CHECKING

from hubspot_summaries.errors import NotFoundError, ValidationError
from hubspot_summaries.notes.filters import FilterCriteria, apply_filters

if TYPE_CHECKING:
    from hubspot_summaries.hubspot.client import HubSpotClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


async def resolve_update_target(
    store: HubSpotClient,
    record_id: str | None = None,
    query: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> str:
    """Pick the single note an update acts on.

    Without an id, ``query`` is required and is the only predicate applied;
    the newest matching note wins.
    """
    if record_id:
        return str(record_id)
    if not query:
        raise ValidationError(
            "Please provide an Engagement ID or a search query to locate the summary note."
        )

    records = await store.list_page(page_size)
    logger.info("Searching %d records for query %r", len(records), query)
    candidates = apply_filters(records, FilterCriteria(query=query, limit=1))
    if not candidates:
        raise NotFoundError("No summary found matching the provided query.")

    logger.info("Resolved update target %s", candidates[0].id)
    return candidates[0].id


async def resolve_delete_targets(
    store: HubSpotClient,
    record_id: str | None = None,
    criteria: FilterCriteria | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    tz: tzinfo | None = None,
) -> list[str]:
    """Pick the notes a delete may act on, newest first.

    Only date, day_of_week and time_range narrow the page; ``limit``
    defaults to 1. Callers delete just the first id.
    """
    if record_id:
        return [str(record_id)]

    criteria = criteria or FilterCriteria()
    delete_criteria = FilterCriteria(
        date=criteria.date,
        day_of_week=criteria.day_of_week,
        time_range=criteria.time_range,
        limit=criteria.limit if criteria.limit is not None else 1,
    )
    delete_criteria.validate()

    records = await store.list_page(page_size)
    candidates = apply_filters(records, delete_criteria, tz=tz)
    if not candidates:
        raise NotFoundError("No summary found matching the provided filters.")

    ids = [r.id for r in candidates]
    logger.info("Resolved %d delete candidate(s): %s", len(ids), ", ".join(ids))
    return ids
