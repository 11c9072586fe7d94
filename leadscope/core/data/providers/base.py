"""Source adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from decimal import Decimal

from leadscope.core.models.institution import RawRecord, SourceSystem
from leadscope.core.models.query import SearchCriteria


class SourceAdapter(ABC):
    """One retrieval strategy for one upstream source.

    ``search`` either returns a (possibly empty) sequence of raw records or
    raises a ``ProviderError``. Adapters never fall back on their own.
    """

    source_system: SourceSystem

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    async def search(self, criteria: SearchCriteria) -> Sequence[RawRecord]:
        """Fetch raw records matching ``criteria``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def dollars_to_thousands(amount: int) -> str:
    """Render a whole-dollar bound in the thousands unit upstream filters use."""

    value = Decimal(amount) / 1000
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


__all__ = ["SourceAdapter", "dollars_to_thousands"]
