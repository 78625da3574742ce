"""Status label codec, normalization and categorization utilities.

Outline documents store an issue status as a single TODO-style keyword, so
labels such as ``"In Progress"`` are encoded before they are pushed upstream
and decoded again when issues are mapped. The codec is an exact inverse pair;
workflow normalization uses the tables in config.py (STATUS_ALIASES,
STATUS_DISPLAY_ORDER, TERMINAL_STATUSES).
"""

from __future__ import annotations

import re

from .config import (
    STATUS_ALIASES,
    STATUS_DISPLAY_ORDER,
    STATUS_LABEL_ESCAPES,
    STATUS_LABEL_SPACE,
    TERMINAL_STATUSES,
)

_ENCODE_TABLE: dict[str, str] = {**dict(STATUS_LABEL_ESCAPES), " ": STATUS_LABEL_SPACE}
_DECODE_TABLE: dict[str, str] = {v: k for k, v in _ENCODE_TABLE.items()}

_ENCODE_RE = re.compile("|".join(re.escape(k) for k in _ENCODE_TABLE))
# Longest tokens first so escapes win over the bare space marker
_DECODE_RE = re.compile("|".join(re.escape(k) for k in sorted(_DECODE_TABLE, key=len, reverse=True)))


def encode_status_label(label: str) -> str:
    """Encode a status label into a whitespace-free outline keyword.

    Parameters
    ----------
    label : str
        Status label as shown by Jira.

    Returns
    -------
    str
        Encoded keyword.

    Examples
    --------
    >>> encode_status_label("In Progress")
    'In_Progress'
    >>> encode_status_label("snake_case")
    'snake%5Fcase'
    """
    return _ENCODE_RE.sub(lambda m: _ENCODE_TABLE[m.group(0)], label)


def decode_status_label(text: str | None) -> str | None:
    """Reverse :func:`encode_status_label`.

    Single left-to-right pass, so ``decode_status_label(encode_status_label(x)) == x``
    for every string ``x``. ``None`` passes through.

    Examples
    --------
    >>> decode_status_label("In_Progress")
    'In Progress'
    >>> decode_status_label("Open")
    'Open'
    """
    if text is None:
        return None
    return _DECODE_RE.sub(lambda m: _DECODE_TABLE[m.group(0)], text)


def normalize_workflow_status(value: str | None) -> str:
    """Map raw Jira status to canonical workflow status names.

    Returns "Unknown" for any unmapped or empty value, which helps surface
    new/unexpected statuses.

    Examples
    --------
    >>> normalize_workflow_status("in progress")
    'In Progress'
    >>> normalize_workflow_status("resolved")
    'Done'
    >>> normalize_workflow_status("some_new_status")
    'Unknown'
    """
    if not value:
        return "Unknown"
    text = str(value).strip().lower()
    if text in STATUS_ALIASES:
        return STATUS_ALIASES[text]
    for status in STATUS_DISPLAY_ORDER:
        if text == status.lower():
            return status
    return "Unknown"


def map_status_category(value: str | None) -> str:
    """Map status to one of "To Do", "In Progress", "Done" or "Other"."""
    normalized = normalize_workflow_status(value)
    if normalized in {"Open", "To Do"}:
        return "To Do"
    if normalized in {"In Progress", "In Review", "Blocked"}:
        return "In Progress"
    if normalized in TERMINAL_STATUSES:
        return "Done"
    return "Other"
