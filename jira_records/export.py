"""Export mapped records to pandas DataFrames."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd
import pytz

from jira_records.core.column_config import get_columns
from jira_records.core.config import DATE_FIELDS, SETTINGS
from jira_records.core.records import Record
from jira_records.core.status import map_status_category


def normalize_timestamp(value, target_tz) -> pd.Timestamp | None:
    """Normalize a timestamp-like value into ``target_tz``.

    Naive values are taken as UTC. Returns None when the input cannot be parsed.
    """
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    try:
        if getattr(ts, "tzinfo", None) is None:
            ts = ts.tz_localize(pytz.UTC)
        return ts.tz_convert(target_tz)
    except (TypeError, ValueError):
        return None


def records_to_dataframe(
    records: Iterable[Record],
    column_set: str | None = None,
    *,
    parse_dates: bool = False,
) -> pd.DataFrame:
    """One row per record, columns in the configured order.

    ``column_set`` defaults to the record type of the first record. Columns
    named in the set but not declared by the record type are left out. When a
    ``status`` column is exported, a derived ``status_category`` ("To Do",
    "In Progress", "Done" or "Other") is appended.
    """
    records = list(records)
    if not records:
        return pd.DataFrame()
    first = records[0]
    columns = [c for c in get_columns(column_set or first.record_type) if c in first.FIELDS]
    if not columns:
        columns = list(first.FIELDS)
    df = pd.DataFrame([r.to_dict() for r in records], columns=columns)
    if "status" in df.columns:
        df["status_category"] = df["status"].apply(map_status_category)
    if parse_dates:
        tz = pytz.timezone(SETTINGS.timezone)
        for col in DATE_FIELDS & set(df.columns):
            df[col] = df[col].apply(lambda v: normalize_timestamp(v, tz))
    return df
