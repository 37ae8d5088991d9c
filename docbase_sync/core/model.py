"""
Structured note representations: the record exchanged between the local
document and DocBase, and the decoded DocBase post.
"""
from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "NoteRecord",
    "RemoteNote",
]


class NoteRecord(BaseModel):
    """
    Structured form of a note, built transiently during each pull or push.
    """

    title: str = ""
    body: str = ""
    draft: bool = False
    tags: list[str] = Field(default_factory=list)

    remote_id: str | None = None
    """
    Id assigned by DocBase, or `None` for a note which hasn't been created
    remotely yet. Only ever read from a document or a DocBase response.
    """

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value: Any) -> Any:
        return normalize_tags(value)

    @field_validator("remote_id", mode="before")
    @classmethod
    def validate_remote_id(cls, value: Any) -> Any:
        return normalize_id(value)

    def to_payload(self) -> dict[str, Any]:
        """
        Get request body for creating or updating this note. Tags are always
        sent as a list, even if there's only one.
        """
        return {
            "title": self.title,
            "body": self.body,
            "draft": self.draft,
            "tags": list(self.tags),
        }


class RemoteNote(BaseModel):
    """
    Post as returned by DocBase. Extra fields in the response are ignored.
    """

    note_id: str = Field(alias="id")
    title: str
    body: str
    draft: bool = False
    tags: list[str] = Field(default_factory=list)
    url: str | None = None

    @field_validator("note_id", mode="before")
    @classmethod
    def validate_note_id(cls, value: Any) -> Any:
        return normalize_id(value)

    @field_validator("body", mode="before")
    @classmethod
    def validate_body(cls, value: Any) -> Any:
        # posts created without a body come back with null
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value: Any) -> Any:
        return normalize_tags(value)

    def to_record(self) -> NoteRecord:
        return NoteRecord(
            title=self.title,
            body=self.body,
            draft=self.draft,
            tags=self.tags,
            remote_id=self.note_id,
        )


def normalize_tags(value: Any) -> Any:
    """
    Accept tags as `None`, a single name, a list of names or a list of
    `{"name": ...}` objects and reduce to a list of names.
    """
    if value is None:
        return []

    # single bare tag
    if isinstance(value, (str, int, float, date)):
        value = [value]

    if not isinstance(value, list):
        # let pydantic handle type error
        return value

    tags: list[Any] = []
    for tag in value:
        # empty list items
        if tag is None:
            continue
        if isinstance(tag, dict) and "name" in tag:
            tag = tag["name"]
        if isinstance(tag, bool):
            tag = "true" if tag else "false"
        elif isinstance(tag, (int, float)):
            tag = str(tag)
        elif isinstance(tag, date):
            tag = tag.isoformat()
        tags.append(tag)

    return tags


def normalize_id(value: Any) -> Any:
    # DocBase ids are numeric, but they're kept as strings locally
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value
