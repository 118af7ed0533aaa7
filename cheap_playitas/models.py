"""Data models used throughout the project."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


OFFER_FIELDS = ("airport", "price", "date", "duration", "hotel", "link")

_MONTH_RE = re.compile(r"\d{4}-\d{2}")
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")
_OFFSET_RE = re.compile(r"(:\d{2}(?:\.\d+)?[+-]\d{2})(\d{2})$")


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    return str(value)


def _price(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not price.is_finite() or price < 0:
        return None
    return price


def _iso(value: str) -> str:
    # fromisoformat on 3.10 rejects "Z", offsets without a colon and
    # fractions longer than microseconds
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    value = _FRACTION_RE.sub(r"\1", value)
    return _OFFSET_RE.sub(r"\1:\2", value)


def _month(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    prefix = value.strip()[:7]
    return prefix if _MONTH_RE.fullmatch(prefix) else None


def _timestamp(value: Any) -> Optional[dt.datetime]:
    if not isinstance(value, str):
        return None
    try:
        return dt.datetime.fromisoformat(_iso(value.strip()))
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class Offer:
    """One flight + hotel package as received from the prices endpoint.

    Values that are missing or cannot be interpreted are stored as ``None``
    so that a single bad record never breaks a whole load.
    """

    airport: Optional[str]
    price: Optional[Decimal]
    date: Optional[dt.datetime]
    duration: Optional[str]
    hotel: Optional[str]
    link: Optional[str]
    month: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, item: Mapping[str, Any]) -> "Offer":
        """Build an offer from one JSON object with lowercase keys."""
        extra = {k: v for k, v in item.items() if k not in OFFER_FIELDS}
        return cls(
            airport=_text(item.get("airport")),
            price=_price(item.get("price")),
            date=_timestamp(item.get("date")),
            duration=_text(item.get("duration")),
            hotel=_text(item.get("hotel")),
            link=_text(item.get("link")),
            month=_month(item.get("date")),
            extra=MappingProxyType(extra),
        )

    def get(self, name: str, default: Any = None) -> Any:
        if name in OFFER_FIELDS:
            value = getattr(self, name)
            return default if value is None else value
        return self.extra.get(name, default)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class SortField(str, Enum):
    """Columns the view can be ordered by."""

    DATE = "date"
    PRICE = "price"

    def key(self, offer: Offer) -> Any:
        """Return the comparison key of *offer*, ``None`` when it has none."""
        if self is SortField.DATE:
            return offer.date.timestamp() if offer.date else None
        return offer.price


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.ASC


__all__ = ["Offer", "OFFER_FIELDS", "SortDirection", "SortField", "SortSpec"]
