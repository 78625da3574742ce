"""Load export column sets from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import COMMENT_FIELDS, ISSUE_FIELDS

logger = logging.getLogger(__name__)

_CACHE: dict[Path, dict[str, list[str]]] = {}


def _fallback_sets() -> dict[str, list[str]]:
    return {"issue": list(ISSUE_FIELDS), "comment": list(COMMENT_FIELDS)}


def load_column_sets(base_path: str | Path | None = None) -> dict[str, list[str]]:
    """Column sets keyed by record type, read from ``<base>/columns.yaml``.

    Missing files, unreadable YAML and empty sets fall back to the record
    types' declared field order.
    """
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    if base in _CACHE:
        return _CACHE[base]
    sets = _fallback_sets()
    yaml_path = base / "columns.yaml"
    if yaml_path.exists():
        try:
            data = yaml.safe_load(yaml_path.read_text()) or {}
        except yaml.YAMLError as exc:
            logger.warning("Ignoring invalid column config %s: %s", yaml_path, exc)
        else:
            for name, columns in (data.get("sets") or {}).items():
                if columns:
                    sets[name] = [str(c) for c in columns]
    _CACHE[base] = sets
    return sets


def get_columns(set_name: str, base_path: str | Path | None = None) -> list[str]:
    sets = load_column_sets(base_path)
    return sets.get(set_name, [])
