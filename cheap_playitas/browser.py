"""
browser – one interactive session over the offers list.

Wires the fetcher, the record store and the filter/sort engine together and
exposes what a front end needs: option lists, current selections, the price
input box, sortable column headers and the resulting view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from .fields import FilterField
from .models import Offer, SortDirection, SortField
from .prices_fetcher import PricesFetcher, PricesFetcherError
from .record_store import RecordStore
from .view_engine import FilterSortEngine

logger = logging.getLogger(__name__)

INACTIVE_GLYPH = "▶"
ASC_GLYPH = "▲"
DESC_GLYPH = "▼"


@dataclass(frozen=True, slots=True)
class Column:
    name: str
    header: str


COLUMNS = (
    Column("airport", "Airport"),
    Column("price", "Price"),
    Column("date", "Date"),
    Column("duration", "Duration"),
    Column("hotel", "Hotel"),
)
LINK_COLUMN = Column("link", "Link")


def parse_price(text: Optional[str]) -> Optional[Decimal]:
    """Parse the max-price input; blank or non-numeric text means no limit."""
    if text is None or not text.strip():
        return None
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


class OfferBrowser:
    def __init__(
        self,
        fetcher: PricesFetcher | None = None,
        store: RecordStore | None = None,
        engine: FilterSortEngine | None = None,
    ) -> None:
        self.fetcher = fetcher if fetcher is not None else PricesFetcher()
        self.store = store if store is not None else RecordStore()
        self.engine = engine if engine is not None else FilterSortEngine()
        self.is_loading = False
        self.notice: Optional[str] = None
        self._view: List[Offer] = []

    @property
    def columns(self) -> tuple:
        return COLUMNS + (LINK_COLUMN,)

    @property
    def view(self) -> List[Offer]:
        return list(self._view)

    def load(self) -> List[Offer]:
        """Fetch the offers once and show them; a failure leaves the view empty."""
        self.is_loading = True
        try:
            offers = self.fetcher.fetch_offers()
        except PricesFetcherError as exc:
            logger.warning("Could not load offers: %s", exc)
            self.notice = f"Could not load offers: {exc}"
            self.store.load(())
        else:
            self.notice = None
            self.store.load(offers)
        finally:
            self.is_loading = False
        return self._refresh()

    # ── filters ───────────────────────────────────────────────

    def options(self, field: FilterField) -> List[str]:
        return self.store.distinct_values(field)

    def selected(self, field: FilterField) -> List[str]:
        return field.order(self.engine.criterion(field))

    def select(self, field: FilterField, values: Iterable[str]) -> List[Offer]:
        self.engine.set_filter(field, values)
        return self._refresh()

    @property
    def max_price_text(self) -> str:
        limit = self.engine.max_price
        return "" if limit is None else str(limit)

    def set_max_price_text(self, text: Optional[str]) -> List[Offer]:
        self.engine.set_max_price(parse_price(text))
        return self._refresh()

    # ── sorting ───────────────────────────────────────────────

    def activate_sort(self, field: SortField) -> List[Offer]:
        """Toggle the direction on the active column, else sort *field* ascending."""
        current = self.engine.sort
        if current.field is field:
            self.engine.set_sort(field, current.direction.toggled())
        else:
            self.engine.set_sort(field, SortDirection.ASC)
        return self._refresh()

    def sort_by(self, field: SortField, direction: SortDirection) -> List[Offer]:
        self.engine.set_sort(field, direction)
        return self._refresh()

    def sort_indicator(self, field: SortField) -> str:
        current = self.engine.sort
        if current.field is not field:
            return INACTIVE_GLYPH
        return ASC_GLYPH if current.direction is SortDirection.ASC else DESC_GLYPH

    def _refresh(self) -> List[Offer]:
        self._view = self.engine.compute_view(self.store.records)
        return self.view


__all__ = [
    "COLUMNS",
    "Column",
    "LINK_COLUMN",
    "OfferBrowser",
    "parse_price",
]
