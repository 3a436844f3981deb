"""Product endpoints.

Thin HTTP wrappers around the query engine and the shop listing. Missing
products become 404s here; the engine itself only ever returns None or an
empty result. Responses carry display names resolved through the
category index.
"""

from collections.abc import Iterable
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from storefront.api.deps import QueryEngine
from storefront.catalog.listing import (
    ALL,
    DEFAULT_MAX_PRICE,
    ListingQuery,
    apply_listing,
    search_products,
)
from storefront.catalog.query import (
    DEFAULT_FEATURED_LIMIT,
    DEFAULT_RELATED_LIMIT,
    CatalogQueryEngine,
)
from storefront.catalog.types import CategoryFilter, Product
from storefront.infra.logging import get_logger
from storefront.schemas.catalog import ProductListResponse, ProductView

router = APIRouter()
logger = get_logger(__name__)


def _views(engine: CatalogQueryEngine, products: Iterable[Product]) -> list[ProductView]:
    return [ProductView.from_product(p, engine.category_index) for p in products]


@router.get("", response_model=ProductListResponse)
async def list_products(
    engine: QueryEngine,
    search: str = "",
    category: str = ALL,
    sub_category: Annotated[str, Query(alias="subCategory")] = ALL,
    min_price: Annotated[float, Query(alias="minPrice", ge=0)] = 0,
    max_price: Annotated[float, Query(alias="maxPrice", ge=0)] = DEFAULT_MAX_PRICE,
    sort: str = "name",
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(alias="pageSize", ge=1, le=200)] = None,
) -> ProductListResponse:
    """Shop listing: search, category filters, price range, sort and pages."""
    query = ListingQuery(
        search=search,
        category=category,
        sub_category=sub_category,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        page=page,
        page_size=page_size,
    )
    result = apply_listing(engine.products, query)
    return ProductListResponse(
        items=_views(engine, result.items),
        total=result.total,
        page=result.page,
        pages=result.pages,
    )


@router.get("/search", response_model=list[ProductView])
async def search(
    engine: QueryEngine,
    q: Annotated[str, Query(min_length=1)],
) -> list[ProductView]:
    """Text search over names, brands, descriptions and taxonomy ids."""
    return _views(engine, search_products(engine.products, q))


@router.get("/featured", response_model=list[ProductView])
async def featured_products(
    engine: QueryEngine,
    limit: Annotated[int, Query(ge=0, le=50)] = DEFAULT_FEATURED_LIMIT,
) -> list[ProductView]:
    return _views(engine, engine.featured(limit))


@router.get("/by-filter", response_model=list[ProductView])
async def products_by_filter(
    engine: QueryEngine,
    category: str,
    sub_category: Annotated[str | None, Query(alias="subCategory")] = None,
) -> list[ProductView]:
    """Products in a category, optionally narrowed to one sub-category."""
    category_filter = CategoryFilter(category=category, sub_category=sub_category)
    return _views(engine, engine.by_filter(category_filter))


@router.get("/{product_id}", response_model=ProductView)
async def get_product(product_id: str, engine: QueryEngine) -> ProductView:
    product = engine.by_id(product_id)
    if product is None:
        logger.debug("Product not found", product_id=product_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product not found: {product_id}",
        )
    return ProductView.from_product(product, engine.category_index)


@router.get("/{product_id}/related", response_model=list[ProductView])
async def related_products(
    product_id: str,
    engine: QueryEngine,
    limit: Annotated[int, Query(ge=0, le=50)] = DEFAULT_RELATED_LIMIT,
) -> list[ProductView]:
    """Related products; an unknown id still returns filler products."""
    return _views(engine, engine.related(product_id, limit))
