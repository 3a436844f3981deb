"""Catalog Query Engine - read-only derivations over the current catalog.

Every operation reads the store's product tuple at call time and returns a
new tuple; nothing is cached and nothing is mutated. Lookups that find
nothing return None or an empty tuple.
"""

from __future__ import annotations

from storefront.catalog.category_index import CategoryIndex
from storefront.catalog.store import CatalogStore
from storefront.catalog.types import CategoryFilter, Product
from storefront.errors import CatalogNotInitializedError

DEFAULT_FEATURED_LIMIT = 3
DEFAULT_RELATED_LIMIT = 4


class CatalogQueryEngine:
    """Category, featured and related-product queries over a CatalogStore."""

    def __init__(self, store: CatalogStore | None, category_index: CategoryIndex | None) -> None:
        if store is None:
            raise CatalogNotInitializedError("CatalogQueryEngine requires a CatalogStore")
        if category_index is None:
            raise CatalogNotInitializedError("CatalogQueryEngine requires a CategoryIndex")
        self._store = store
        self._category_index = category_index

    # -------------------------------------------------------------------------
    # Store passthrough
    # -------------------------------------------------------------------------

    @property
    def products(self) -> tuple[Product, ...]:
        return self._store.products

    @property
    def loading(self) -> bool:
        return self._store.loading

    @property
    def error(self) -> str | None:
        return self._store.error

    @property
    def category_index(self) -> CategoryIndex:
        return self._category_index

    async def refetch(self) -> None:
        await self._store.refetch()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def by_category(self, category_id: str) -> tuple[Product, ...]:
        """Products whose category set contains ``category_id``, in store order."""
        return tuple(p for p in self._store.products if p.in_category(category_id))

    def by_sub_category_within_category(
        self, category_id: str, sub_category_id: str
    ) -> tuple[Product, ...]:
        """Products in ``category_id`` whose sub-category set contains ``sub_category_id``.

        Products without a sub-category never match.
        """
        return tuple(
            p
            for p in self._store.products
            if p.in_category(category_id) and p.in_sub_category(sub_category_id)
        )

    def by_filter(self, category_filter: CategoryFilter) -> tuple[Product, ...]:
        """Entry point for category browsing; narrows by sub-category when given."""
        if category_filter.sub_category:
            return self.by_sub_category_within_category(
                category_filter.category, category_filter.sub_category
            )
        return self.by_category(category_filter.category)

    def by_id(self, product_id: str) -> Product | None:
        return next((p for p in self._store.products if p.id == product_id), None)

    def featured(self, limit: int = DEFAULT_FEATURED_LIMIT) -> tuple[Product, ...]:
        """Curated products first; highest-rated products when none are curated.

        Curated products keep store order. The fallback is a stable sort by
        rating descending, with a missing rating counted as 0.
        """
        limit = max(limit, 0)
        products = self._store.products

        curated = [p for p in products if p.featured is True]
        if curated:
            return tuple(curated[:limit])

        by_rating = sorted(products, key=lambda p: p.rating or 0, reverse=True)
        return tuple(by_rating[:limit])

    def related(self, product_id: str, limit: int = DEFAULT_RELATED_LIMIT) -> tuple[Product, ...]:
        """Products sharing the anchor's primary category or sub-category.

        Candidates keep store order and are topped up with the remaining
        products (store order) until ``limit`` is reached. The anchor itself
        is never included. An unknown anchor yields the first ``limit``
        products.
        """
        limit = max(limit, 0)
        products = self._store.products
        others = [p for p in products if p.id != product_id]

        anchor = self.by_id(product_id)
        if anchor is None:
            return tuple(others[:limit])

        category = anchor.primary_category
        sub_category = anchor.primary_sub_category

        related = [
            p
            for p in others
            if (category is not None and p.in_category(category))
            or (sub_category is not None and p.in_sub_category(sub_category))
        ]

        if len(related) < limit:
            included = {p.id for p in related}
            related.extend(p for p in others if p.id not in included)

        return tuple(related[:limit])
