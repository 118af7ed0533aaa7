from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .models import Offer


def offer_row(offer: Offer) -> List[str]:
    """Return the display cells of *offer* in column order."""
    return [
        offer.airport or "",
        "" if offer.price is None else str(offer.price),
        offer.date.strftime("%Y-%m-%d") if offer.date else "",
        offer.duration or "",
        offer.hotel or "",
        offer.link or "",
    ]


def render_table(headers: Sequence[str], offers: Iterable[Offer]) -> str:
    """Format *offers* as a plain text table under *headers*."""
    rows = [list(headers)] + [offer_row(off) for off in offers]
    widths: Dict[int, int] = {}
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths.get(idx, 0), len(cell))
    lines = []
    for row in rows:
        lines.append(
            "  ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row)).rstrip()
        )
    return "\n".join(lines)


__all__ = ["offer_row", "render_table"]
