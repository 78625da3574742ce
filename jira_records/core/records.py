"""Base record contract: identifier, raw payload and hydrate strategy."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import Future
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Self

from .errors import InvalidArgument

RawData = Mapping[str, Any]
HydrateResult = RawData | None
HydrateStrategy = Callable[[str], "HydrateResult | Future[HydrateResult]"]
HydrateCallback = Callable[[HydrateResult], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Record:
    """A single remote tracking-system item.

    Records are immutable. Hydration and mapping never change a record in
    place; they return new instances via :func:`dataclasses.replace` or the
    type's field mapper. ``raw_data`` is deep-copied on construction so later
    changes to the caller's payload do not leak into the record.

    Subclasses declare ``record_type`` (the registry tag) and ``FIELDS``
    (the explicit field order used by :meth:`dump` and :meth:`to_dict`), and
    implement :meth:`map_raw`.
    """

    id: str
    raw_data: RawData | None = field(default=None, repr=False, compare=False)
    hydrate_strategy: HydrateStrategy | None = field(default=None, repr=False, compare=False)
    # Only set by field mappers through build_mapped()
    mapped: bool = field(default=False, init=False, repr=False)

    record_type: ClassVar[str] = "record"
    FIELDS: ClassVar[Sequence[str]] = ("id",)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidArgument(f"{type(self).__name__} requires a non-empty id, got {self.id!r}")
        if self.raw_data is not None:
            object.__setattr__(self, "raw_data", copy.deepcopy(dict(self.raw_data)))

    @classmethod
    def create(cls, record_id: str, hydrate_strategy: HydrateStrategy | None = None) -> Self:
        return cls(id=record_id, hydrate_strategy=hydrate_strategy)

    @classmethod
    def build_mapped(cls, **values: Any) -> Self:
        """Construct a record whose fields were populated by a field mapper."""
        record = cls(**values)
        object.__setattr__(record, "mapped", True)
        return record

    @property
    def is_mapped(self) -> bool:
        return self.mapped

    # ------------------ Hydration ------------------
    def hydrate(
        self, callback: HydrateCallback | None = None
    ) -> HydrateResult | Future[HydrateResult]:
        """Fetch raw data for this record's id through the bound strategy.

        A synchronous strategy's result is returned directly and its errors
        propagate to the caller. A strategy that returns a
        :class:`~concurrent.futures.Future` has its future passed back
        untouched. ``callback`` is invoked exactly once with the raw data in
        both cases, on completion for futures. A future that fails or is
        cancelled is logged and reported to ``callback`` as ``None``; the
        error itself stays on the returned future.

        Without a bound strategy this logs a warning and yields ``None``; the
        record stays unmapped.
        """
        if self.hydrate_strategy is None:
            logger.warning(
                "Hydration not implemented for record type %r (id=%s)", self.record_type, self.id
            )
            if callback is not None:
                callback(None)
            return None

        logger.debug("Hydrating %s %s", self.record_type, self.id)
        result = self.hydrate_strategy(self.id)
        if isinstance(result, Future):
            if callback is not None:
                result.add_done_callback(lambda fut: callback(self._future_result(fut)))
            return result
        if callback is not None:
            callback(result)
        return result

    def _future_result(self, fut: Future[HydrateResult]) -> HydrateResult:
        if fut.cancelled():
            logger.warning("Hydration of %s %s was cancelled", self.record_type, self.id)
            return None
        exc = fut.exception()
        if exc is not None:
            logger.warning("Hydration of %s %s failed: %s", self.record_type, self.id, exc)
            return None
        return fut.result()

    def with_raw_data(self, raw: RawData | None) -> Self:
        """Copy of this record carrying ``raw``; the copy is unmapped."""
        return replace(self, raw_data=raw)

    # ------------------ Mapping ------------------
    @classmethod
    def map_raw(cls, raw: RawData, **kwargs: Any) -> Self:
        raise NotImplementedError(f"{cls.__name__} does not define a field mapper")

    def from_data(self, raw: RawData) -> Self:
        """Return a new, fully mapped record built from ``raw``.

        The receiver is left untouched. Its id is used only when the payload
        carries none, and its hydrate strategy is carried over.
        """
        return type(self).map_raw(raw, fallback_id=self.id, hydrate_strategy=self.hydrate_strategy)

    # ------------------ Export ------------------
    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}

    def dump(self) -> str:
        """Human-readable ``name: value`` listing of every bound field."""
        lines = [f"{name}: {value}" for name, value in self.to_dict().items() if value is not None]
        return "\n".join(lines)
