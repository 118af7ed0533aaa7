from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional

from .models import Offer


class FilterField(str, Enum):
    """Categorical fields a user can restrict with a multi-select."""

    AIRPORT = "airport"
    MONTH = "date"
    DURATION = "duration"
    HOTEL = "hotel"

    def extract(self, offer: Offer) -> Optional[str]:
        """Return the value of *offer* this field filters on."""
        if self is FilterField.AIRPORT:
            return offer.airport
        if self is FilterField.MONTH:
            return offer.month
        if self is FilterField.DURATION:
            return offer.duration
        return offer.hotel

    def order(self, values: Iterable[str]) -> List[str]:
        """Sort distinct *values* the way option lists show them.

        Durations are ordered numerically when every value is a number and
        fall back to plain text ordering otherwise.
        """
        values = list(values)
        if self is FilterField.DURATION:
            try:
                return sorted(values, key=lambda v: (Decimal(v.strip()), v))
            except InvalidOperation:
                pass
        return sorted(values)


@dataclass(frozen=True, slots=True)
class FilterCriterion:
    field: FilterField
    allowed: FrozenSet[str]

    def matches(self, offer: Offer) -> bool:
        return self.field.extract(offer) in self.allowed


__all__ = ["FilterCriterion", "FilterField"]
