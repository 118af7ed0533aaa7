from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
import requests

from cheap_playitas.prices_fetcher import PricesFetcher, PricesFetcherError


def make_payload():
    return [
        {
            "airport": "CPH",
            "price": 3000,
            "date": "2024-03-10T00:00:00",
            "duration": "7",
            "hotel": "Playitas Resort",
            "link": "https://example.com/1",
        },
        {
            "airport": "BLL",
            "price": 5000,
            "date": "2024-03-05T00:00:00",
            "duration": "14",
            "hotel": "Playitas Annexe",
            "link": "https://example.com/2",
        },
    ]


def make_capitalized_payload():
    return [
        {
            "Airport": "AAL",
            "Price": "4200",
            "Date": "2024-05-01",
            "Duration": "8",
            "Hotel": "Playitas Villas",
            "Link": "https://example.com/3",
        }
    ]


@patch("requests.get")
def test_fetch_offers(mock_get):
    mock_resp = Mock(status_code=200)
    mock_resp.json.return_value = make_payload()
    mock_get.return_value = mock_resp

    fetcher = PricesFetcher("https://prices.test/api/prices", timeout=5)
    offers = fetcher.fetch_offers()

    assert [off.airport for off in offers] == ["CPH", "BLL"]
    assert offers[0].price == Decimal("3000")
    mock_get.assert_called_once()
    args, kwargs = mock_get.call_args
    assert args[0] == "https://prices.test/api/prices"
    assert kwargs["timeout"] == 5


@patch("requests.get")
def test_capitalized_keys_are_normalized(mock_get):
    mock_resp = Mock(status_code=200)
    mock_resp.json.return_value = make_capitalized_payload()
    mock_get.return_value = mock_resp

    offers = PricesFetcher("https://prices.test").fetch_offers()
    assert len(offers) == 1
    assert offers[0].airport == "AAL"
    assert offers[0].price == Decimal("4200")
    assert offers[0].link == "https://example.com/3"


@patch("requests.get")
def test_skip_non_object_items(mock_get):
    mock_resp = Mock(status_code=200)
    mock_resp.json.return_value = make_payload() + ["oops", 42]
    mock_get.return_value = mock_resp

    offers = PricesFetcher("https://prices.test").fetch_offers()
    assert len(offers) == 2


@patch("requests.get")
def test_http_error(mock_get):
    mock_get.return_value = Mock(status_code=503, text="Service Unavailable")
    with pytest.raises(PricesFetcherError, match="HTTP 503"):
        PricesFetcher("https://prices.test").fetch_offers()


@patch("requests.get")
def test_transport_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("boom")
    with pytest.raises(PricesFetcherError, match="boom"):
        PricesFetcher("https://prices.test").fetch_offers()


@patch("requests.get")
def test_invalid_json(mock_get):
    mock_resp = Mock(status_code=200)
    mock_resp.json.side_effect = ValueError("Expecting value")
    mock_get.return_value = mock_resp
    with pytest.raises(PricesFetcherError, match="Invalid JSON"):
        PricesFetcher("https://prices.test").fetch_offers()


@patch("requests.get")
def test_body_must_be_array(mock_get):
    mock_resp = Mock(status_code=200)
    mock_resp.json.return_value = {"data": make_payload()}
    mock_get.return_value = mock_resp
    with pytest.raises(PricesFetcherError, match="JSON array"):
        PricesFetcher("https://prices.test").fetch_offers()


def test_defaults_come_from_settings(monkeypatch):
    from cheap_playitas.config import get_settings

    monkeypatch.setenv("PRICES_URL", "https://env.test/prices")
    monkeypatch.setenv("HTTP_TIMEOUT_S", "3")
    get_settings.cache_clear()
    try:
        fetcher = PricesFetcher()
        assert fetcher.url == "https://env.test/prices"
        assert fetcher.timeout == 3
    finally:
        get_settings.cache_clear()
