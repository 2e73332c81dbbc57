"""Tests for the terminal client."""

import asyncio

import httpx
import pytest

import cli_catalog
from app import catalog_client
from app.catalog_client import CatalogClient
from app.filters import ProductQuery

PRODUCTS = [
    {"id": 1, "title": "Shoe", "slug": "shoe-1", "price": 10},
    {"id": 2, "title": "Hat", "slug": "hat-1", "price": 50},
]


def test_main_filters_products(monkeypatch, capsys):
    async def fake_query(query):
        assert query == ProductQuery(title=None, slug=None, min_price="20", max_price=None)
        return [PRODUCTS[1]]

    monkeypatch.setattr(cli_catalog, "perform_query", fake_query)

    assert cli_catalog.main(["--min-price", "20"]) == 0
    out = capsys.readouterr().out
    assert "results: 1" in out
    assert "Hat" in out
    assert "Shoe" not in out


def test_main_reports_missing_product(monkeypatch, capsys):
    async def fake_lookup(product_id):
        return None

    monkeypatch.setattr(cli_catalog, "perform_lookup", fake_lookup)

    assert cli_catalog.main(["--id", "42"]) == 1
    assert "not found" in capsys.readouterr().out


def test_pretty_print_handles_missing_price(capsys):
    cli_catalog.pretty_print_products(ProductQuery(), [{"id": 3, "title": "Odd"}])

    out = capsys.readouterr().out
    assert "Filters: none | results: 1" in out
    assert "01. 3 | - |" in out


@pytest.fixture
def mocked_upstream(monkeypatch):
    """Route the shared catalog client through an in-memory transport."""

    calls: list = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.path.endswith("/products"):
            return httpx.Response(200, json=PRODUCTS)
        product_id = request.url.path.rsplit("/", 1)[-1]
        for product in PRODUCTS:
            if str(product["id"]) == product_id:
                return httpx.Response(200, json=product)
        return httpx.Response(400, json={"message": "not found"})

    def build(*args, **kwargs):
        return CatalogClient(*args, transport=httpx.MockTransport(handler), **kwargs)

    catalog_client.get_catalog_client.cache_clear()
    monkeypatch.setattr(catalog_client, "CatalogClient", build)
    yield calls
    catalog_client.get_catalog_client.cache_clear()


def test_repeated_lookups_get_a_fresh_client(mocked_upstream):
    """Closing after one lookup must not poison the next one."""

    assert asyncio.run(cli_catalog.perform_lookup("1")) == PRODUCTS[0]
    assert asyncio.run(cli_catalog.perform_lookup("2")) == PRODUCTS[1]
    assert asyncio.run(cli_catalog.perform_lookup("9")) is None
    assert len(mocked_upstream) == 3


def test_repeated_queries_get_a_fresh_client(mocked_upstream):
    query = ProductQuery(min_price="20")

    assert asyncio.run(cli_catalog.perform_query(query)) == [PRODUCTS[1]]
    assert asyncio.run(cli_catalog.perform_query(ProductQuery())) == PRODUCTS
