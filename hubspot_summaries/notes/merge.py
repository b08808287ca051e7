"""Merge-on-empty update policy."""

from __future__ import annotations

from hubspot_summaries.notes.codec import NoteFields


def merge_fields(
    previous: NoteFields,
    title: str | None = None,
    summary: str | None = None,
    author: str | None = None,
) -> NoteFields:
    """Combine caller-supplied fields with the stored ones.

    A caller value wins only when non-empty; ``None`` and ``""`` both keep
    the stored value, so an update can never clear a field.
    """
    return NoteFields(
        title=title or previous.title,
        summary=summary or previous.summary,
        author=author or previous.author,
    )
