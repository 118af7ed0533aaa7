from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from .fields import FilterCriterion, FilterField
from .models import Offer, SortDirection, SortField, SortSpec

logger = logging.getLogger(__name__)


class FilterSortEngine:
    """Current filter criteria and sort order of one browsing session.

    ``compute_view`` derives the visible offers from a record snapshot:

    1. offers above the price bound (or without a price) are dropped,
    2. every categorical criterion must match (logical AND across fields),
    3. the survivors are stably sorted by the active :class:`SortSpec`.

    A criterion whose allowed set is empty, or covers every value present
    for its field, does not restrict anything.
    """

    def __init__(self) -> None:
        self._criteria: Dict[FilterField, FilterCriterion] = {}
        self._max_price: Optional[Decimal] = None
        self._sort = SortSpec()

    # ──────────────────────────────────────────────────────────

    @property
    def max_price(self) -> Optional[Decimal]:
        return self._max_price

    @property
    def sort(self) -> SortSpec:
        return self._sort

    def criterion(self, field: FilterField) -> FrozenSet[str]:
        crit = self._criteria.get(field)
        return crit.allowed if crit else frozenset()

    def set_filter(self, field: FilterField, allowed: Iterable[str]) -> None:
        """Replace the criterion for *field*; an empty set removes it."""
        values = frozenset(allowed)
        if values:
            self._criteria[field] = FilterCriterion(field, values)
        else:
            self._criteria.pop(field, None)

    def clear_filter(self, field: FilterField) -> None:
        self._criteria.pop(field, None)

    def set_max_price(self, value: Optional[Decimal]) -> None:
        self._max_price = value

    def set_sort(self, field: SortField, direction: SortDirection) -> None:
        self._sort = SortSpec(field, direction)

    # ──────────────────────────────────────────────────────────

    def compute_view(self, records: Sequence[Offer]) -> List[Offer]:
        """Return the filtered and ordered offers of *records*."""
        view = list(records)

        if self._max_price is not None:
            limit = self._max_price
            view = [off for off in view if off.price is not None and off.price <= limit]

        for field in FilterField:
            crit = self._criteria.get(field)
            if crit is None or self._covers_all(crit, records):
                continue
            view = [off for off in view if crit.matches(off)]

        view = self._sorted(view)
        logger.debug(
            "View: %d of %d offers, sort=%s %s",
            len(view),
            len(records),
            self._sort.field.value,
            self._sort.direction.value,
        )
        return view

    @staticmethod
    def _covers_all(crit: FilterCriterion, records: Sequence[Offer]) -> bool:
        present = {crit.field.extract(off) for off in records}
        present.discard(None)
        return present <= crit.allowed

    def _sorted(self, offers: List[Offer]) -> List[Offer]:
        sort_field = self._sort.field
        keyed = [off for off in offers if sort_field.key(off) is not None]
        missing = [off for off in offers if sort_field.key(off) is None]
        # sorted() keeps ties in input order with reverse=True as well
        keyed = sorted(
            keyed,
            key=sort_field.key,
            reverse=self._sort.direction is SortDirection.DESC,
        )
        return keyed + missing


__all__ = ["FilterSortEngine"]
