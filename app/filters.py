"""In-memory product filtering.

Constraints narrow the list in a fixed order: title, slug, minPrice, maxPrice.
Blank or unparseable constraints are skipped rather than rejected.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

# Leading decimal number, the way browsers parse "12.5abc" as 12.5.
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INFINITY_RE = re.compile(r"[+-]?Infinity")


def parse_price(value: Any) -> Optional[float]:
    """Parse a price bound; ``None`` when the value is blank or not a number."""

    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    text = str(value).strip()
    match = _LEADING_NUMBER_RE.match(text)
    if match:
        return float(match.group(0))
    if _INFINITY_RE.match(text):
        return float("-inf") if text.startswith("-") else float("inf")
    return None


@dataclass(frozen=True)
class ProductQuery:
    title: Optional[str] = None
    slug: Optional[str] = None
    min_price: Any = None
    max_price: Any = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "ProductQuery":
        return cls(
            title=params.get("title"),
            slug=params.get("slug"),
            min_price=params.get("minPrice"),
            max_price=params.get("maxPrice"),
        )


def _field(product: Any, name: str) -> Any:
    # Upstream arrays occasionally carry nulls; treat them as empty records.
    return product.get(name) if isinstance(product, dict) else None


def _record_price(product: Any) -> Optional[float]:
    if not isinstance(product, dict):
        return None
    price = product.get("price")
    if price is None:
        return 0.0
    if isinstance(price, bool):
        return float(price)
    if isinstance(price, (int, float)):
        value = float(price)
    else:
        try:
            value = float(str(price).strip() or 0)
        except ValueError:
            return None
    return None if math.isnan(value) else value


def _within(product: Any, lower: Optional[float] = None, upper: Optional[float] = None) -> bool:
    price = _record_price(product)
    if price is None:
        return False
    if lower is not None and price < lower:
        return False
    if upper is not None and price > upper:
        return False
    return True


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def filter_products(
    products: List[Dict[str, Any]], constraints: ProductQuery | Mapping[str, Any]
) -> List[Dict[str, Any]]:
    """Return the subset of ``products`` matching every active constraint.

    The input list is never mutated. A record without a price compares as 0;
    a record whose price is not numeric (NaN included) fails any active bound.
    Entries that are not objects match no active constraint.
    """

    query = constraints if isinstance(constraints, ProductQuery) else ProductQuery.from_mapping(constraints)
    result = list(products)

    title = _text(query.title).strip()
    if title:
        needle = title.lower()
        result = [p for p in result if needle in _text(_field(p, "title")).lower()]

    slug = _text(query.slug).strip()
    if slug:
        result = [p for p in result if _text(_field(p, "slug")) == slug]

    min_price = parse_price(query.min_price)
    if min_price is not None:
        result = [p for p in result if _within(p, lower=min_price)]

    max_price = parse_price(query.max_price)
    if max_price is not None:
        result = [p for p in result if _within(p, upper=max_price)]

    return result
