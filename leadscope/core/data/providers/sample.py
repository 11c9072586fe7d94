"""Terminal tier serving the embedded snapshot."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from leadscope.core.data.providers.base import SourceAdapter
from leadscope.core.data.providers.sample_data import bank_records, credit_union_records
from leadscope.core.models.institution import RawRecord, SourceSystem
from leadscope.core.models.query import SearchCriteria

_LOADERS: dict[SourceSystem, Callable[[], list[dict[str, object]]]] = {
    SourceSystem.FDIC: bank_records,
    SourceSystem.NCUA: credit_union_records,
}


class EmbeddedSampleAdapter(SourceAdapter):
    """Return a static snapshot without any I/O; cannot fail."""

    def __init__(
        self,
        source_system: SourceSystem,
        records: Sequence[RawRecord] | None = None,
        name: str = "embedded-sample",
    ) -> None:
        super().__init__(name)
        self.source_system = source_system
        self._records = list(records) if records is not None else _LOADERS[source_system]()

    async def search(self, criteria: SearchCriteria) -> Sequence[RawRecord]:
        # Unfiltered; criteria are applied after normalization.
        return [dict(record) for record in self._records]


__all__ = ["EmbeddedSampleAdapter"]
