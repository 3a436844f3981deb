"""Shop listing - search, filter, sort and paginate a product list.

Applied by the shop page on top of the query engine's output. Products
with an explicit ``priority`` always come first (lowest first); the
selected sort key orders products within the same priority.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from storefront.catalog.types import Product

ALL = "all"
DEFAULT_MAX_PRICE = 30_000_000

SORT_KEYS: dict[str, Callable[[Product], Any]] = {
    "name": lambda p: p.name.casefold(),
    "price-low": lambda p: p.price,
    "price-high": lambda p: -p.price,
    "rating": lambda p: -(p.rating or 0),
}


@dataclass(frozen=True)
class ListingQuery:
    """Transient shop-page state."""

    search: str = ""
    category: str = ALL
    sub_category: str = ALL
    min_price: float = 0
    max_price: float = DEFAULT_MAX_PRICE
    sort: str = "name"
    page: int = 1
    page_size: int | None = None


@dataclass(frozen=True)
class ListingPage:
    items: tuple[Product, ...]
    total: int
    page: int
    pages: int


def matches_search(product: Product, term: str) -> bool:
    """Case-insensitive match on name, description or brand."""
    needle = term.strip().lower()
    if not needle:
        return True
    return (
        needle in product.name.lower()
        or needle in product.description.lower()
        or needle in product.brand.lower()
    )


def matches_listing(product: Product, query: ListingQuery) -> bool:
    if not matches_search(product, query.search):
        return False
    if query.category != ALL and not product.in_category(query.category):
        return False
    if query.sub_category != ALL and not product.in_sub_category(query.sub_category):
        return False
    return query.min_price <= product.price <= query.max_price


def sort_products(products: Iterable[Product], sort: str = "name") -> list[Product]:
    """Priority first, then the sort key; unknown keys sort by name."""
    secondary = SORT_KEYS.get(sort, SORT_KEYS["name"])
    return sorted(products, key=lambda p: (p.sort_priority, secondary(p)))


def apply_listing(products: Sequence[Product], query: ListingQuery) -> ListingPage:
    """Filter, sort and paginate ``products`` for the shop page."""
    ordered = sort_products(
        (p for p in products if matches_listing(p, query)),
        query.sort,
    )
    total = len(ordered)

    if not query.page_size:
        return ListingPage(items=tuple(ordered), total=total, page=1, pages=1)

    page = max(query.page, 1)
    pages = max(math.ceil(total / query.page_size), 1)
    start = (page - 1) * query.page_size
    return ListingPage(
        items=tuple(ordered[start:start + query.page_size]),
        total=total,
        page=page,
        pages=pages,
    )


def search_products(products: Iterable[Product], term: str) -> tuple[Product, ...]:
    """Text search that also matches category and sub-category ids."""
    needle = term.strip().lower()

    def hit(p: Product) -> bool:
        ids = " ".join(sorted(p.category_ids | p.sub_category_ids)).lower()
        return matches_search(p, needle) or needle in ids

    return tuple(p for p in products if hit(p))


def distinct_category_ids(products: Iterable[Product]) -> list[str]:
    """Sorted category ids referenced by any product."""
    ids: set[str] = set()
    for p in products:
        ids |= p.category_ids
    return sorted(ids)


def distinct_sub_category_ids(products: Iterable[Product]) -> list[str]:
    """Sorted sub-category ids referenced by any product."""
    ids: set[str] = set()
    for p in products:
        ids |= p.sub_category_ids
    return sorted(ids)
