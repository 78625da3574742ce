"""Exceptions raised by the record layer."""

from __future__ import annotations

from collections.abc import Iterable


class RecordError(Exception):
    """Base class for record construction and dispatch failures."""


class InvalidArgument(RecordError, ValueError):
    """A record was constructed without a usable identifier."""


class UnknownRecordType(RecordError, LookupError):
    """A record-type tag has no registered record class."""

    def __init__(self, tag: str, known: Iterable[str] = ()):
        self.tag = tag
        self.known = tuple(sorted(known))
        message = f"Unknown record type {tag!r}"
        if self.known:
            message += f" (registered: {', '.join(self.known)})"
        super().__init__(message)
