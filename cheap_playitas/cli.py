from __future__ import annotations

import logging
from typing import Optional, Tuple

import click

from .browser import OfferBrowser
from .config import get_settings
from .fields import FilterField
from .models import SortDirection, SortField
from .table import render_table

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Set up root logging from the application settings."""
    settings = get_settings()
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    logging.basicConfig(
        level=settings.log_level,
        handlers=handlers,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _load(browser: OfferBrowser) -> None:
    browser.load()
    if browser.notice:
        raise click.ClickException(browser.notice)


@click.group()
def cli() -> None:
    """Browse cheap flight + hotel offers."""
    configure_logging()


@cli.command()
@click.option("--airport", multiple=True, help="Departure airport (repeatable)")
@click.option("--month", multiple=True, help="Departure month YYYY-MM (repeatable)")
@click.option("--duration", multiple=True, help="Trip duration (repeatable)")
@click.option("--hotel", multiple=True, help="Hotel name (repeatable)")
@click.option("--max-price", help="Maximum price; non-numeric text means no limit")
@click.option(
    "--sort",
    "sort_field",
    type=click.Choice([f.value for f in SortField]),
    default=SortField.DATE.value,
    show_default=True,
)
@click.option("--desc", is_flag=True, help="Sort in descending order")
def show(
    airport: Tuple[str, ...],
    month: Tuple[str, ...],
    duration: Tuple[str, ...],
    hotel: Tuple[str, ...],
    max_price: Optional[str],
    sort_field: str,
    desc: bool,
) -> None:
    """Fetch offers and print the filtered, sorted list."""
    browser = OfferBrowser()
    _load(browser)

    browser.select(FilterField.AIRPORT, airport)
    browser.select(FilterField.MONTH, month)
    browser.select(FilterField.DURATION, duration)
    browser.select(FilterField.HOTEL, hotel)
    browser.set_max_price_text(max_price)
    view = browser.sort_by(
        SortField(sort_field), SortDirection.DESC if desc else SortDirection.ASC
    )

    headers = []
    for col in browser.columns:
        header = col.header
        if col.name in {f.value for f in SortField}:
            header += " " + browser.sort_indicator(SortField(col.name))
        headers.append(header)

    click.echo(render_table(headers, view))
    click.echo(f"{len(view)} of {len(browser.store)} offers")


@cli.command()
@click.argument(
    "field", type=click.Choice(["airport", "month", "duration", "hotel"])
)
def options(field: str) -> None:
    """Print the values available for a filter FIELD."""
    browser = OfferBrowser()
    _load(browser)
    for value in browser.options(FilterField[field.upper()]):
        click.echo(value)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
