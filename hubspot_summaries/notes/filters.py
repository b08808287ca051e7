"""
Filter engine — narrows, sorts and truncates a page of summary records.

Shared by listing, update-target and delete-target resolution; callers only
differ in which predicates they populate and in the default limit.

Predicates (all AND-combined, absent = always true):
    date         UTC calendar date of createdAt, exact "YYYY-MM-DD" match
    day_of_week  Sunday..Saturday, case-insensitive, local time
    time_range   local "HH:MM" within [start, end], string comparison
    query        case-insensitive substring of the body blob

Results are sorted newest first (stable for equal timestamps) and cut to
``limit`` when one is given.

Usage:
    from hubspot_summaries.notes.filters import FilterCriteria, apply_filters

    criteria = FilterCriteria.from_arguments({"dayOfWeek": "Monday", "limit": 2})
    newest_mondays = apply_filters(records, criteria)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, tzinfo
from typing import Any

from hubspot_summaries.errors import ValidationError
from hubspot_summaries.notes.models import SummaryRecord

logger = logging.getLogger(__name__)

DAY_INDEX: dict[str, int] = {
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}


@dataclass(frozen=True)
class TimeRange:
    """Inclusive time-of-day window. Bounds must be zero-padded "HH:MM"."""

    start: str = ""
    end: str = ""

    @property
    def active(self) -> bool:
        return bool(self.start and self.end)


@dataclass(frozen=True)
class FilterCriteria:
    date: str | None = None
    day_of_week: str | None = None
    time_range: TimeRange | None = None
    query: str | None = None
    limit: int | None = None

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> FilterCriteria:
        """Build from MCP tool arguments (dayOfWeek, timeRange{start,end}, ...).

        Raises:
            ValidationError: an argument has the wrong JSON type.
        """
        time_range = None
        raw_range = arguments.get("timeRange")
        if raw_range is not None:
            if not isinstance(raw_range, dict):
                raise ValidationError(f"timeRange must be an object, got {raw_range!r}")
            time_range = TimeRange(
                start=optional_str(raw_range, "start", "timeRange.start") or "",
                end=optional_str(raw_range, "end", "timeRange.end") or "",
            )
        return cls(
            date=optional_str(arguments, "date"),
            day_of_week=optional_str(arguments, "dayOfWeek"),
            time_range=time_range,
            query=optional_str(arguments, "query"),
            limit=coerce_limit(arguments.get("limit")),
        )

    def validate(self) -> None:
        """Raise ValidationError for an unknown day name or a non-positive limit."""
        if self.day_of_week:
            resolve_weekday(self.day_of_week)
        if self.limit is not None and self.limit <= 0:
            raise ValidationError("limit must be positive")


# ─── Validation ──────────────────────────────────────────────────────


def resolve_weekday(name: str) -> int:
    """Map a day name to 0=Sunday..6=Saturday. No abbreviations."""
    index = DAY_INDEX.get(name.lower())
    if index is None:
        raise ValidationError(f"Invalid dayOfWeek provided: {name}")
    return index


def optional_str(arguments: dict[str, Any], key: str, label: str | None = None) -> str | None:
    """Return a string argument, ``None`` when absent or empty."""
    value = arguments.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label or key} must be a string, got {value!r}")
    return value


def coerce_limit(value: Any) -> int | None:
    """Validate a limit argument. ``None`` means no limit."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"limit must be a positive integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"limit must be a positive integer, got {value!r}")
        value = int(value)
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"limit must be a positive integer, got {value!r}") from None
    if limit <= 0:
        raise ValidationError("limit must be positive")
    return limit


# ─── Predicates ──────────────────────────────────────────────────────


def utc_date(record: SummaryRecord) -> str:
    return record.created_at(UTC).strftime("%Y-%m-%d")


def local_weekday(record: SummaryRecord, tz: tzinfo | None = None) -> int:
    # isoweekday: Monday=1..Sunday=7, so % 7 gives Sunday=0
    return record.created_at(tz).isoweekday() % 7


def local_time_of_day(record: SummaryRecord, tz: tzinfo | None = None) -> str:
    return record.created_at(tz).strftime("%H:%M")


def matches_query(record: SummaryRecord, query: str) -> bool:
    return query.lower() in (record.body or "").lower()


def sort_newest_first(records: Iterable[SummaryRecord]) -> list[SummaryRecord]:
    return sorted(records, key=lambda r: r.created_at_ms, reverse=True)


# ─── Engine ──────────────────────────────────────────────────────────


def apply_filters(
    records: Iterable[SummaryRecord],
    criteria: FilterCriteria,
    tz: tzinfo | None = None,
) -> list[SummaryRecord]:
    """Filter, sort newest first and truncate.

    ``tz`` is the zone used for the day-of-week and time-of-day predicates
    (``None`` = server local). The date predicate always uses UTC.

    Raises:
        ValidationError: unknown day name or non-positive limit.
    """
    criteria.validate()
    weekday = resolve_weekday(criteria.day_of_week) if criteria.day_of_week else None

    results = list(records)
    logger.debug("Filtering %d records with %s", len(results), criteria)

    if criteria.date:
        results = [r for r in results if utc_date(r) == criteria.date]
        logger.debug("After date filter: %d", len(results))

    if weekday is not None:
        results = [r for r in results if local_weekday(r, tz) == weekday]
        logger.debug("After dayOfWeek filter: %d", len(results))

    time_range = criteria.time_range
    if time_range is not None and time_range.active:
        results = [
            r
            for r in results
            if time_range.start <= local_time_of_day(r, tz) <= time_range.end
        ]
        logger.debug("After timeRange filter: %d", len(results))

    if criteria.query:
        results = [r for r in results if matches_query(r, criteria.query)]
        logger.debug("After query filter: %d", len(results))

    results = sort_newest_first(results)
    if criteria.limit is not None:
        results = results[: criteria.limit]
    return results
