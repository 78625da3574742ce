"""Record factory: resolve type tags to record classes and drive hydrate/map."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import UnknownRecordType
from .models import Comment, Issue
from .records import HydrateStrategy, RawData, Record

if TYPE_CHECKING:
    from .jira_client import JiraAPI

logger = logging.getLogger(__name__)

RecordCallback = Callable[[Record], None]


@dataclass(frozen=True, slots=True)
class Registration:
    record_cls: type[Record]
    hydrate_strategy: HydrateStrategy | None = None


def normalize_tag(tag: str) -> str:
    """``"issue"``, ``":issue"`` and ``"Issue"`` all name the same type."""
    return str(tag).strip().lstrip(":").lower()


class RecordFactory:
    def __init__(self, entries: dict[str, Registration] | None = None):
        self._entries: dict[str, Registration] = {}
        for tag, entry in (entries or {}).items():
            self.register(tag, entry.record_cls, entry.hydrate_strategy)

    @classmethod
    def default(cls) -> RecordFactory:
        """Issue and comment types with no hydrate strategies bound."""
        factory = cls()
        factory.register(Issue.record_type, Issue)
        factory.register(Comment.record_type, Comment)
        return factory

    @classmethod
    def for_client(cls, api: JiraAPI) -> RecordFactory:
        factory = cls.default()
        factory.register(Issue.record_type, Issue, api.issue_strategy())
        return factory

    # ------------------ Registry ------------------
    def register(
        self,
        tag: str,
        record_cls: type[Record],
        hydrate_strategy: HydrateStrategy | None = None,
    ) -> None:
        key = normalize_tag(tag)
        if not key:
            raise ValueError("Record type tag must not be empty")
        self._entries[key] = Registration(record_cls, hydrate_strategy)

    @property
    def tags(self) -> list[str]:
        return sorted(self._entries)

    def resolve(self, record_type: str) -> Registration:
        entry = self._entries.get(normalize_tag(record_type))
        if entry is None:
            raise UnknownRecordType(record_type, self._entries)
        return entry

    # ------------------ Construction ------------------
    def create_from_id(
        self,
        record_type: str,
        record_id: str,
        callback: RecordCallback | None = None,
    ) -> Record:
        """Build a record from ``record_id`` and hydrate it.

        The returned record carries the fetched ``raw_data`` but is not mapped;
        pass it to :meth:`map_record` for the second phase. For synchronous
        strategies ``callback`` is invoked before returning.

        With an asynchronous strategy and a ``callback``, the record is
        returned without raw data and ``callback`` receives the raw-loaded
        record on completion (raw data ``None`` if the fetch failed). Without
        a callback the future is waited on, so the fetched data is never
        dropped and fetch errors propagate to the caller.
        """
        entry = self.resolve(record_type)
        record = entry.record_cls.create(record_id, entry.hydrate_strategy)

        on_raw = None
        if callback is not None:
            on_raw = lambda raw: callback(record.with_raw_data(raw))  # noqa: E731

        result = record.hydrate(callback=on_raw)
        if isinstance(result, Future):
            if callback is not None:
                return record
            result = result.result()
        return record.with_raw_data(result)

    def create_from_data(self, record_type: str, raw: RawData) -> Record:
        entry = self.resolve(record_type)
        return entry.record_cls.map_raw(raw, hydrate_strategy=entry.hydrate_strategy)

    def create_record_from_data(self, record_type: str) -> Callable[[RawData], Record]:
        """Return a mapping closure for batch ingestion of one record type."""
        entry = self.resolve(record_type)

        def build(raw: RawData) -> Record:
            return entry.record_cls.map_raw(raw, hydrate_strategy=entry.hydrate_strategy)

        return build

    def create_many_from_data(self, record_type: str, raws: Iterable[RawData]) -> list[Record]:
        build = self.create_record_from_data(record_type)
        records = [build(raw) for raw in raws]
        logger.debug("Mapped %s %s records", len(records), normalize_tag(record_type))
        return records

    @staticmethod
    def map_record(record: Record) -> Record:
        """Second phase of :meth:`create_from_id`; unloaded records pass through."""
        if record.raw_data is None:
            return record
        return record.from_data(record.raw_data)


_DEFAULT_FACTORY = RecordFactory.default()


def configure(api: JiraAPI) -> RecordFactory:
    """Bind the default factory's issue hydration to ``api``."""
    global _DEFAULT_FACTORY
    _DEFAULT_FACTORY = RecordFactory.for_client(api)
    return _DEFAULT_FACTORY


def get_factory() -> RecordFactory:
    return _DEFAULT_FACTORY


def create_from_id(record_type: str, record_id: str, callback: RecordCallback | None = None) -> Record:
    return _DEFAULT_FACTORY.create_from_id(record_type, record_id, callback)


def create_from_data(record_type: str, raw: RawData) -> Record:
    return _DEFAULT_FACTORY.create_from_data(record_type, raw)


def create_record_from_data(record_type: str) -> Callable[[RawData], Record]:
    return _DEFAULT_FACTORY.create_record_from_data(record_type)


def map_record(record: Record) -> Record:
    return RecordFactory.map_record(record)
