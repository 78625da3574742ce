"""Mapping raw Jira issue and comment JSON into record instances."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import COMPONENT_DELIMITER, FIELD_IDS
from .errors import InvalidArgument
from .models import Comment, Issue
from .paths import get_in, get_text
from .records import HydrateStrategy, RawData
from .status import decode_status_label


def join_components(value: Any) -> str:
    """Flatten a ``components`` array into a delimited string of names.

    >>> join_components([{"name": "A"}, {"name": "B"}])
    'A, B'
    >>> join_components(None)
    ''
    """
    if not isinstance(value, list):
        return ""
    names = [get_text(c, "name") for c in value]
    return COMPONENT_DELIMITER.join(n for n in names if n)


def _user_name(value: Any) -> str | None:
    # Server payloads may carry a bare username instead of a user object
    if isinstance(value, str):
        return value or None
    return get_text(value, "displayName") or get_text(value, "name")


def _named(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    return get_text(value, "name")


def _extract_adf_text(node: Any) -> str:
    """Recursively extract plain text from an ADF document node."""
    if not isinstance(node, Mapping):
        return ""
    if node.get("type") == "text":
        return node.get("text", "")
    parts = [_extract_adf_text(child) for child in node.get("content") or []]
    return "\n".join(filter(None, parts))


def _rich_text(value: Any) -> str | None:
    # Jira Cloud (REST v3) returns rich text as Atlassian Document Format
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return _extract_adf_text(value)
    return str(value)


def _record_id(raw: RawData, path: str, fallback_id: str | None) -> str:
    record_id = get_text(raw, path) or fallback_id
    if not record_id:
        raise InvalidArgument(f"Raw payload has no {path!r} and no fallback id was given")
    return record_id


def map_issue(
    raw: RawData,
    *,
    fallback_id: str | None = None,
    hydrate_strategy: HydrateStrategy | None = None,
) -> Issue:
    fields = get_in(raw, "fields", {})
    summary = get_text(fields, "summary")
    return Issue.build_mapped(
        id=_record_id(raw, "key", fallback_id),
        raw_data=raw,
        hydrate_strategy=hydrate_strategy,
        issue_id=get_text(raw, "id"),
        project_key=get_text(fields, "project.key"),
        # headline and summary share a source field in Jira
        headline=summary,
        summary=summary,
        description=_rich_text(get_in(fields, "description")),
        type=get_text(fields, "issuetype.name"),
        status=decode_status_label(get_text(fields, "status.name")),
        priority=get_text(fields, "priority.name"),
        components=join_components(get_in(fields, "components")),
        assignee=_user_name(get_in(fields, "assignee")),
        reporter=_user_name(get_in(fields, "reporter")),
        resolution=_named(get_in(fields, "resolution")),
        created=get_text(fields, "created"),
        updated=get_text(fields, "updated"),
        start_date=get_text(fields, FIELD_IDS["start_date"]),
        duedate=get_text(fields, "duedate"),
    )


def map_comment(
    raw: RawData,
    *,
    fallback_id: str | None = None,
    hydrate_strategy: HydrateStrategy | None = None,
) -> Comment:
    return Comment.build_mapped(
        id=_record_id(raw, "id", fallback_id),
        raw_data=raw,
        hydrate_strategy=hydrate_strategy,
        author=_user_name(get_in(raw, "author")),
        body=_rich_text(get_in(raw, "body")),
        created=get_text(raw, "created"),
        updated=get_text(raw, "updated"),
    )


def issue_comments(raw: RawData) -> list[Comment]:
    """Map the comments embedded in an issue payload (``fields.comment.comments``)."""
    comments_raw = get_in(raw, "fields.comment.comments", []) or []
    return [map_comment(c) for c in comments_raw if isinstance(c, Mapping) and get_text(c, "id")]
