"""Concrete record types for Jira issues and comments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .config import COMMENT_FIELDS, ISSUE_FIELDS
from .records import RawData, Record


@dataclass(frozen=True, slots=True)
class Issue(Record):
    # ``id`` is the human key (e.g. "EX-1"); ``issue_id`` the numeric internal id
    issue_id: str | None = None
    project_key: str | None = None
    headline: str | None = None
    summary: str | None = None
    description: str | None = None
    type: str | None = None
    status: str | None = None
    priority: str | None = None
    components: str | None = None
    assignee: str | None = None
    reporter: str | None = None
    resolution: str | None = None
    created: str | None = None
    updated: str | None = None
    start_date: str | None = None
    duedate: str | None = None

    record_type: ClassVar[str] = "issue"
    FIELDS: ClassVar = ISSUE_FIELDS

    @classmethod
    def map_raw(cls, raw: RawData, **kwargs: Any) -> Issue:
        from .mappers import map_issue

        return map_issue(raw, **kwargs)


@dataclass(frozen=True, slots=True)
class Comment(Record):
    author: str | None = None
    body: str | None = None
    created: str | None = None
    updated: str | None = None

    record_type: ClassVar[str] = "comment"
    FIELDS: ClassVar = COMMENT_FIELDS

    @classmethod
    def map_raw(cls, raw: RawData, **kwargs: Any) -> Comment:
        from .mappers import map_comment

        return map_comment(raw, **kwargs)
