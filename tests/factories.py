"""Test data builders shared across test modules."""

from typing import Any
from unittest.mock import MagicMock

from storefront.catalog.store import CatalogSnapshot, CatalogStore
from storefront.catalog.types import Product


def make_record(product_id: str, category: Any, **fields: Any) -> dict[str, Any]:
    """Build a raw camelCase product record with sensible defaults."""
    record: dict[str, Any] = {
        "id": product_id,
        "name": fields.pop("name", product_id.replace("-", " ").title()),
        "brand": "Garutech",
        "description": f"{product_id} description",
        "price": 100_000,
        "image": f"/images/{product_id}.png",
        "category": category,
        "inStock": True,
        "stockCount": 5,
        "reviews": 10,
    }
    record.update(fields)
    return record


def mock_store(products: tuple[Product, ...]) -> MagicMock:
    """A CatalogStore stand-in holding ``products``."""
    store = MagicMock(spec=CatalogStore)
    store.products = products
    store.loading = False
    store.error = None
    store.loaded = True
    store.snapshot.return_value = CatalogSnapshot(products=products, loading=False, error=None)
    return store
