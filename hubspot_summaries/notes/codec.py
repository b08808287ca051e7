"""
Body codec — the three note fields in one line-prefixed text blob.

    Title: <title>
    Summary: <summary>
    Author: <author>

Decoding is lenient: a missing label line decodes to an empty string and
unlabeled lines are ignored. Update relies on that (absent = unset).
Embedded newlines in field values are not escaped.
"""

from __future__ import annotations

from dataclasses import dataclass

TITLE_PREFIX = "Title: "
SUMMARY_PREFIX = "Summary: "
AUTHOR_PREFIX = "Author: "


@dataclass(frozen=True)
class NoteFields:
    title: str = ""
    summary: str = ""
    author: str = ""


def encode(title: str, summary: str, author: str) -> str:
    return f"{TITLE_PREFIX}{title}\n{SUMMARY_PREFIX}{summary}\n{AUTHOR_PREFIX}{author}"


def encode_fields(fields: NoteFields) -> str:
    return encode(fields.title, fields.summary, fields.author)


def decode(body: str | None) -> NoteFields:
    """Parse a body blob. Repeated labels: the last line wins."""
    title = summary = author = ""
    for line in (body or "").split("\n"):
        if line.startswith(TITLE_PREFIX):
            title = line[len(TITLE_PREFIX) :]
        elif line.startswith(SUMMARY_PREFIX):
            summary = line[len(SUMMARY_PREFIX) :]
        elif line.startswith(AUTHOR_PREFIX):
            author = line[len(AUTHOR_PREFIX) :]
    return NoteFields(title=title, summary=summary, author=author)
