"""Central configuration, constants, and shared field definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://example.atlassian.net"
JIRA_REST_API_VERSION = "3"
TIMEZONE = "UTC"

# Expansions requested on single-issue hydration
ISSUE_FETCH_EXPAND: Sequence[str] = ("renderedFields",)

# =============================================================================
# Jira Custom Field IDs
# =============================================================================
FIELD_IDS = {
    # Jira Cloud "Start date" field
    "start_date": "customfield_10015",
}

# Canonical field list for single-issue fetches
ISSUE_FETCH_FIELDS: Sequence[str] = (
    "summary",
    "description",
    "assignee",
    "reporter",
    "priority",
    "project",
    "status",
    "issuetype",
    "components",
    "created",
    "updated",
    "duedate",
    "resolution",
    FIELD_IDS["start_date"],
)

# =============================================================================
# Record Field Mapping
# =============================================================================
COMPONENT_DELIMITER = ", "

# Record fields in dump/export order
ISSUE_FIELDS: Sequence[str] = (
    "id",
    "issue_id",
    "project_key",
    "headline",
    "summary",
    "description",
    "type",
    "status",
    "priority",
    "components",
    "assignee",
    "reporter",
    "resolution",
    "created",
    "updated",
    "start_date",
    "duedate",
)

COMMENT_FIELDS: Sequence[str] = (
    "id",
    "author",
    "body",
    "created",
    "updated",
)

# Date-like record fields converted when exporting with ``parse_dates=True``
DATE_FIELDS: frozenset[str] = frozenset({"created", "updated"})

# =============================================================================
# Workflow Status Configuration
# =============================================================================
# Canonical display order for workflow statuses
STATUS_DISPLAY_ORDER: Sequence[str] = (
    "Open",
    "To Do",
    "In Progress",
    "In Review",
    "Blocked",
    "Cancelled",
    "Done",
)

# Statuses that indicate a ticket is closed/terminal
TERMINAL_STATUSES: frozenset[str] = frozenset({"Done", "Cancelled"})

# Map various status strings to canonical display names
# Keys should be lowercase for case-insensitive matching
STATUS_ALIASES: dict[str, str] = {
    "open": "Open",
    "new": "Open",
    "reopened": "Open",
    "to do": "To Do",
    "todo": "To Do",
    "backlog": "To Do",
    "in progress": "In Progress",
    "in-progress": "In Progress",
    "in review": "In Review",
    "code review": "In Review",
    "blocked": "Blocked",
    "cancelled": "Cancelled",
    "canceled": "Cancelled",
    "won't do": "Cancelled",
    "done": "Done",
    "resolved": "Done",
    "closed": "Done",
    "complete": "Done",
}

# Outline keyword encoding for status labels pushed upstream.
# The escape character itself must stay first.
STATUS_LABEL_ESCAPES: Sequence[tuple[str, str]] = (
    ("%", "%25"),
    ("_", "%5F"),
)
STATUS_LABEL_SPACE = "_"


@dataclass(slots=True)
class AppSettings:
    server: str = JIRA_DEFAULT_SERVER
    rest_api_version: str = JIRA_REST_API_VERSION
    timezone: str = TIMEZONE
    hydrate_max_workers: int = 8


SETTINGS = AppSettings()
