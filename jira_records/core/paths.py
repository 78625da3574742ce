"""Optional path lookup over deserialized Jira payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def get_in(data: Any, path: str | Sequence[str], default: Any = None) -> Any:
    """Walk ``path`` through nested mappings, returning ``default`` on any miss.

    ``path`` is either a dotted string (``"fields.project.key"``) or a sequence
    of keys. A segment that is missing, or an intermediate value that is not a
    mapping (``None``, a string, a list), ends the walk with ``default``. A
    present key whose value is ``None`` also yields ``default``.

    Examples
    --------
    >>> get_in({"fields": {"project": {"key": "EX"}}}, "fields.project.key")
    'EX'
    >>> get_in({"fields": {"assignee": None}}, "fields.assignee.displayName") is None
    True
    """
    keys = path.split(".") if isinstance(path, str) else path
    node = data
    for key in keys:
        if not isinstance(node, Mapping):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


def get_text(data: Any, path: str | Sequence[str]) -> str | None:
    """Like :func:`get_in` but only returns scalar values, as strings."""
    value = get_in(data, path)
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return None
    if isinstance(value, str):
        return value
    return str(value)
