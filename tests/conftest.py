"""Shared fixtures: a small catalog, a fabricated taxonomy and an API client."""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.catalog.category_index import CategoryIndex
from storefront.catalog.sources import StaticProductSource
from storefront.catalog.store import CatalogStore
from storefront.catalog.types import Product

from tests.factories import make_record, mock_store


SAMPLE_RECORDS: list[dict[str, Any]] = [
    make_record(
        "spraybooth",
        ["spraybooth", "bodyparts"],
        name="Garutech Spray Booth",
        subCategory=["paint-booths"],
        price=27_000_000,
        rating=4.8,
        priority=1,
        specifications={"Wall panel": "sandwich style"},
        features=["Quiet operation", "Extended lifespan"],
    ),
    make_record(
        "frame-pro",
        "bodyparts",
        name="Frame Pro Bench",
        subCategory="frame-machines",
        price=4_500_000,
        originalPrice=5_000_000,
        rating=4.5,
    ),
    make_record(
        "mig-welder",
        "bodyparts",
        name="MIG Welder 250",
        subCategory=["welding-equipment"],
        price=850_000,
        rating=4.2,
        featured=True,
    ),
    make_record(
        "two-post-lift",
        "garagetools",
        name="Two Post Lift",
        subCategory="lifting-equipment",
        price=3_200_000,
        rating=4.9,
        featured=True,
    ),
    make_record(
        "impact-wrench",
        ["garagetools", "handtools"],
        name="Impact Wrench",
        brand="AirMax",
        subCategory=["air-tools", "pneumatic-tools"],
        price=180_000,
    ),
    make_record(
        "thinkcar-pro",
        "diagnosticscanners",
        name="Thinkcar Pro Scanner",
        brand="Thinkcar",
        subCategory="thinkcar",
        price=650_000,
        rating=4.7,
        priority=2,
        inStock=False,
        stockCount=3,
    ),
    make_record(
        "socket-set",
        "handtools",
        name="Socket Set 94pc",
        price=95_000,
        rating=4.0,
    ),
]

TAXONOMY: dict[str, Any] = {
    "categories": [
        {"id": "spraybooth", "name": "SprayBooth", "description": "Car ovens", "icon": "🔥"},
        {"id": "bodyparts", "name": "Body Equipment", "description": "Body shop", "icon": "🛡️"},
        {"id": "garagetools", "name": "Garage Tools", "description": "Workshop", "icon": "🔧"},
        {"id": "handtools", "name": "Hand Tools", "description": "Hand tools", "icon": "🖐️"},
        {"id": "accessories", "name": "Our Brand", "description": "House brand", "icon": "✨"},
    ],
    "sub_categories": [
        {"id": "frame-machines", "name": "Frame Machines", "parent_category": "bodyparts"},
        {"id": "welding-equipment", "name": "Welding Equipment", "parent_category": "bodyparts"},
        {"id": "lifting-equipment", "name": "Lifting Equipment", "parent_category": "garagetools"},
        {"id": "air-tools", "name": "Air Tools", "parent_category": "garagetools"},
        {"id": "pneumatic-tools", "name": "Pneumatic Tools", "parent_category": "handtools"},
    ],
}


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def products(sample_records: list[dict[str, Any]]) -> tuple[Product, ...]:
    return tuple(Product.model_validate(r) for r in sample_records)


@pytest.fixture
def category_index() -> CategoryIndex:
    return CategoryIndex.from_dict(TAXONOMY)


@pytest.fixture
def store(products: tuple[Product, ...]) -> MagicMock:
    return mock_store(products)


@pytest_asyncio.fixture
async def loaded_store(sample_records: list[dict[str, Any]]) -> CatalogStore:
    """A real store that has fetched the sample catalog."""
    catalog_store = CatalogStore(StaticProductSource(records=sample_records))
    await catalog_store.refetch()
    return catalog_store


@pytest_asyncio.fixture
async def client(
    loaded_store: CatalogStore, category_index: CategoryIndex
) -> AsyncGenerator[AsyncClient, None]:
    """API client over the sample catalog; the app lifespan is not run."""
    from storefront.api.deps import get_category_index, get_store
    from storefront.main import app

    app.dependency_overrides[get_store] = lambda: loaded_store
    app.dependency_overrides[get_category_index] = lambda: category_index

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
