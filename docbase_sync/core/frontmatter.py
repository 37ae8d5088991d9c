"""
Parsing and rendering of the YAML front matter block at the start of a
document.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .exceptions import ParseError
from .model import normalize_id, normalize_tags

__all__ = [
    "DELIMITER",
    "NOTE_ID_KEY",
    "FrontMatter",
]

DELIMITER = "---"
"""
Marker on its own line opening and closing the front matter.
"""

NOTE_ID_KEY = "docbase_note_id"
"""
Front matter key linking a document to its DocBase post.
"""

_FRONT_MATTER_RE = re.compile(
    r"\A\ufeff?(?:[ \t]*\r?\n)*---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontMatter(BaseModel):
    """
    Metadata of a document. Keys other than the ones below are kept as extra
    fields so they survive a rewrite of the block.
    """

    model_config = ConfigDict(extra="allow")

    note_id: str | None = Field(default=None, alias=NOTE_ID_KEY)
    title: str | None = None
    draft: bool = False
    tags: list[str] = Field(default_factory=list)

    @field_validator("note_id", mode="before")
    @classmethod
    def validate_note_id(cls, value: Any) -> Any:
        value = normalize_id(value)

        if isinstance(value, str):
            value = value.strip()

            # blank id means the document isn't linked yet
            if not value:
                return None

            if not (value.isascii() and value.isdigit()):
                raise ValueError(f"note id must be numeric, got {value!r}")

        return value

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value: Any) -> Any:
        # unquoted titles like 2024, true or 2024-05-01 load as non-strings
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("draft", mode="before")
    @classmethod
    def validate_draft(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value: Any) -> Any:
        return normalize_tags(value)

    def to_mapping(self) -> dict[str, Any]:
        """
        Get fields which were explicitly provided, keyed as they appear in
        the document.
        """
        mapping = self.model_dump(by_alias=True, exclude_unset=True)
        mapping.update(self.model_extra or {})
        return mapping


def parse(text: str) -> tuple[FrontMatter, str]:
    """
    Split document into front matter and the text following its closing
    delimiter.
    """
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        raise ParseError("missing front matter")

    try:
        mapping = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise ParseError(f"malformed front matter: {e}") from e

    if mapping is None:
        mapping = {}

    if not isinstance(mapping, dict):
        raise ParseError(f"malformed front matter: not a mapping: {mapping!r}")

    try:
        front_matter = FrontMatter.model_validate(
            {str(key): value for key, value in mapping.items()}
        )
    except ValidationError as e:
        raise ParseError(f"malformed front matter: {e}") from e

    return front_matter, text[match.end() :]


def render(front_matter: FrontMatter, text: str) -> str:
    """
    Prepend front matter to the given text.
    """
    mapping = front_matter.to_mapping()

    # an empty mapping would otherwise be emitted as "{}"
    mapping_yaml = (
        yaml.dump(
            _quote_values(mapping),
            Dumper=_Dumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        )
        if mapping
        else ""
    )
    return f"{DELIMITER}\n{mapping_yaml}{DELIMITER}\n{text}"


class _Quoted(str):
    """
    String value to be emitted double-quoted.
    """


class _Dumper(yaml.SafeDumper):
    """
    Emits block sequences indented under their key:

    tags:
      - "a"
    """

    def increase_indent(self, flow: bool = False, indentless: bool = False):
        return super().increase_indent(flow, False)


def _represent_quoted(dumper: yaml.SafeDumper, value: _Quoted) -> yaml.Node:
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style='"')


_Dumper.add_representer(_Quoted, _represent_quoted)


def _quote_values(value: Any) -> Any:
    """
    Recursively mark string values, but not keys, for quoting.
    """
    if isinstance(value, str):
        return _Quoted(value)
    if isinstance(value, dict):
        return {key: _quote_values(v) for key, v in value.items()}
    if isinstance(value, list):
        return [_quote_values(v) for v in value]
    return value
