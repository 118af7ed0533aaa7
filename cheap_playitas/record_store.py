from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from .fields import FilterField
from .models import Offer

logger = logging.getLogger(__name__)


class RecordStore:
    """Holds the unfiltered offers of the last successful fetch."""

    def __init__(self) -> None:
        self._records: Tuple[Offer, ...] = ()
        self._distinct: Dict[FilterField, List[str]] = {}

    @property
    def records(self) -> Tuple[Offer, ...]:
        return self._records

    def load(self, records: Iterable[Offer]) -> None:
        """Replace the snapshot with *records*."""
        snapshot = tuple(records)
        self._records = snapshot
        self._distinct = {}
        logger.info("Loaded %d offers", len(snapshot))

    def distinct_values(self, field: FilterField) -> List[str]:
        """Return the sorted distinct values of *field* in the snapshot."""
        if field not in self._distinct:
            seen = {field.extract(off) for off in self._records}
            seen.discard(None)
            self._distinct[field] = field.order(seen)
        return list(self._distinct[field])

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["RecordStore"]
