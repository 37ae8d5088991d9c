"""
Conversion between document text and {obj}`NoteRecord`.

A document looks like:

```
---
docbase_note_id: "42"
title: "Title"
draft: false
tags:
  - "tag"
---

# Title

Body text...
```

Rendering is a full overwrite: front matter keys besides the note id, title,
draft flag and tags are not carried over from the previous document, nor is
anything between the front matter and the heading.
"""
from __future__ import annotations

import re

from . import frontmatter
from .exceptions import ParseError
from .frontmatter import FrontMatter
from .model import NoteRecord

__all__ = [
    "parse_document",
    "render_document",
    "assign_note_id",
]

_HEADING_RE = re.compile(r"^#(?:[ \t]+([^\r\n]*))?[ \t]*\r?$", re.MULTILINE)
"""
Level-1 markdown heading ending the metadata section.
"""


def parse_document(text: str, *, require_id: bool = True) -> NoteRecord:
    """
    Extract note record from document text.

    :param text: Document text
    :param require_id: Fail if the front matter has no `docbase_note_id`

    :raises ParseError: Front matter, note id or body missing
    """
    front_matter, rest = frontmatter.parse(text)

    if require_id and not front_matter.note_id:
        raise ParseError("missing note id")

    match = _HEADING_RE.search(rest)
    if not match:
        raise ParseError("missing body")

    # drop the heading's line break, then the blank line emitted by render
    body = _strip_line_break(_strip_line_break(rest[match.end() :]))

    title = front_matter.title
    if title is None:
        title = (match.group(1) or "").strip()

    return NoteRecord(
        title=title,
        body=body,
        draft=front_matter.draft,
        tags=front_matter.tags,
        remote_id=front_matter.note_id,
    )


def render_document(record: NoteRecord, note_id: str | None = None) -> str:
    """
    Render note record as document text, using the record's own id if
    `note_id` isn't given.
    """
    note_id = note_id or record.remote_id
    assert note_id, f"Attempt to render note without an id: {record.title!r}"

    front_matter = FrontMatter.model_validate(
        {
            frontmatter.NOTE_ID_KEY: note_id,
            "title": record.title,
            "draft": record.draft,
            "tags": record.tags,
        }
    )

    return frontmatter.render(
        front_matter, f"\n# {record.title}\n\n{record.body}"
    )


def assign_note_id(text: str, note_id: str) -> str:
    """
    Set note id in the document's front matter. Other front matter keys are
    kept and the text after the front matter is left as is.
    """
    front_matter, rest = frontmatter.parse(text)
    front_matter.note_id = note_id

    return frontmatter.render(front_matter, rest)


def _strip_line_break(text: str) -> str:
    if text.startswith("\r\n"):
        return text[2:]
    if text.startswith("\n"):
        return text[1:]
    return text
