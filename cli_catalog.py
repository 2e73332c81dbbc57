"""Terminal client that reuses the in-process fetch and filter logic."""
from __future__ import annotations

import argparse
import asyncio
import json
from typing import Iterable

from app.catalog_client import close_catalog_client, get_catalog_client
from app.filters import ProductQuery, filter_products

MAX_RESULTS = 100


async def perform_query(query: ProductQuery) -> list[dict]:
    client = get_catalog_client()
    try:
        products = await client.fetch_all()
    finally:
        await close_catalog_client()
    return filter_products(products, query)


async def perform_lookup(product_id: str) -> dict | None:
    client = get_catalog_client()
    try:
        return await client.fetch_by_id(product_id)
    finally:
        await close_catalog_client()


def pretty_print_products(query: ProductQuery, products: list[dict]) -> None:
    active = {key: value for key, value in vars(query).items() if value not in (None, "")}
    print(f"Filters: {active or 'none'} | results: {len(products)}")
    for idx, item in enumerate(products[:MAX_RESULTS], start=1):
        price = item.get("price")
        price_repr = f"{price:.2f}" if isinstance(price, (int, float)) else "-"
        print(f"  {idx:02d}. {item.get('id')} | {price_repr} | {item.get('slug')} | {item.get('title')}")


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the product catalog")
    parser.add_argument("--id", dest="product_id", help="Show a single product by id")
    parser.add_argument("--title", help="Case-insensitive substring of the title")
    parser.add_argument("--slug", help="Exact slug")
    parser.add_argument("--min-price", help="Inclusive lower price bound")
    parser.add_argument("--max-price", help="Inclusive upper price bound")
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.product_id:
        product = asyncio.run(perform_lookup(args.product_id))
        if product is None:
            print(f"Product {args.product_id} not found")
            return 1
        print(json.dumps(product, indent=2, ensure_ascii=False))
        return 0

    query = ProductQuery(title=args.title, slug=args.slug, min_price=args.min_price, max_price=args.max_price)
    products = asyncio.run(perform_query(query))
    pretty_print_products(query, products)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
