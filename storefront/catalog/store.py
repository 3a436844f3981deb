"""Catalog Store - the live snapshot of fetched product records.

The store is the only component that replaces the product list. A refetch
swaps the whole list on success and keeps the previous list on failure,
recording the failure in ``error``. An optional background loop refetches
periodically.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from pydantic import ValidationError

from storefront.catalog.sources import ProductSource, RawRecord, build_product_source
from storefront.catalog.types import Product
from storefront.infra.logging import get_logger

logger = get_logger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch products"


@dataclass(frozen=True)
class CatalogSnapshot:
    """Point-in-time view of the store.

    Attributes:
        products: Products from the last successful fetch
        loading: True before the first fetch completes and while one is in flight
        error: Message from the last failed fetch, None after a success
    """

    products: tuple[Product, ...]
    loading: bool
    error: str | None


class CatalogStore:
    """Holds the product list from the last successful fetch."""

    def __init__(self, source: ProductSource) -> None:
        self._source = source
        self._products: tuple[Product, ...] = ()
        self._loading = True
        self._error: str | None = None
        self._loaded = False
        self._lock = asyncio.Lock()
        self._refresh_task: asyncio.Task[None] | None = None

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def loading(self) -> bool:
        """True until the first fetch completes, and during each refetch."""
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def loaded(self) -> bool:
        """True once at least one fetch has succeeded."""
        return self._loaded

    @property
    def source(self) -> ProductSource:
        return self._source

    def snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            products=self._products,
            loading=self._loading,
            error=self._error,
        )

    async def refetch(self) -> None:
        """Fetch all records and replace the product list.

        Never raises for fetch failures: the previous products are kept and
        ``error`` is set. Concurrent calls are serialized.
        """
        async with self._lock:
            self._loading = True
            try:
                records = await self._source.fetch_records()
                products = parse_products(records)
            except Exception as e:
                self._error = FETCH_ERROR_MESSAGE
                logger.error(
                    "Error fetching products",
                    error=str(e),
                    error_type=type(e).__name__,
                    kept=len(self._products),
                    exc_info=True,
                )
            else:
                self._products = products
                self._error = None
                self._loaded = True
                logger.info("Catalog refreshed", count=len(products))
            finally:
                self._loading = False

    async def start_refresh_loop(self, interval_seconds: float) -> None:
        """Start periodic refetching in the background.

        Args:
            interval_seconds: Delay between refetches; must be positive
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if self._refresh_task is not None:
            logger.warning("Refresh loop already running")
            return

        logger.info("Starting catalog refresh loop", interval_seconds=interval_seconds)
        self._refresh_task = asyncio.create_task(self._refresh_loop(interval_seconds))

    async def stop(self) -> None:
        """Stop the periodic refresh loop."""
        if self._refresh_task is None:
            logger.debug("No refresh loop running")
            return

        logger.info("Stopping catalog refresh loop")
        self._refresh_task.cancel()

        try:
            await self._refresh_task
        except asyncio.CancelledError:
            logger.info("Refresh loop cancelled successfully")

        self._refresh_task = None

    async def _refresh_loop(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            await self.refetch()


def parse_products(records: list[RawRecord]) -> tuple[Product, ...]:
    """Validate raw records, skipping (and logging) malformed ones."""
    products: list[Product] = []
    for record in records:
        try:
            products.append(Product.model_validate(record))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid product record",
                product_id=record.get("id") if isinstance(record, dict) else None,
                errors=e.error_count(),
            )
    return tuple(products)


# Global singleton instance
_catalog_store: CatalogStore | None = None


def get_catalog_store() -> CatalogStore:
    """Get or create the global catalog store bound to the configured source."""
    global _catalog_store

    if _catalog_store is None:
        _catalog_store = CatalogStore(build_product_source())
        logger.info("Created global CatalogStore singleton")

    return _catalog_store
