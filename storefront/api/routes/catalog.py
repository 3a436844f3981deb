"""Catalog status, refetch and referenced-id endpoints."""

from fastapi import APIRouter

from storefront.api.deps import QueryEngine, Store
from storefront.catalog.listing import distinct_category_ids, distinct_sub_category_ids
from storefront.infra.logging import get_logger
from storefront.schemas.catalog import CatalogStatusResponse, TaxonomyRefResponse

router = APIRouter()
logger = get_logger(__name__)


def _status(store: Store) -> CatalogStatusResponse:
    snapshot = store.snapshot()
    return CatalogStatusResponse(
        loading=snapshot.loading,
        error=snapshot.error,
        count=len(snapshot.products),
    )


@router.get("", response_model=CatalogStatusResponse)
async def catalog_status(store: Store) -> CatalogStatusResponse:
    """Loading/error state and size of the current catalog snapshot."""
    return _status(store)


@router.post("/refetch", response_model=CatalogStatusResponse)
async def refetch_catalog(store: Store) -> CatalogStatusResponse:
    """Refetch the full product list.

    A failed fetch keeps the previous products and reports ``error``.
    """
    logger.info("Catalog refetch requested")
    await store.refetch()
    return _status(store)


@router.get("/category-ids", response_model=list[TaxonomyRefResponse])
async def category_ids(engine: QueryEngine) -> list[TaxonomyRefResponse]:
    """Category ids referenced by at least one product, sorted."""
    return [
        TaxonomyRefResponse(id=c, name=engine.category_index.category_name(c))
        for c in distinct_category_ids(engine.products)
    ]


@router.get("/sub-category-ids", response_model=list[TaxonomyRefResponse])
async def sub_category_ids(engine: QueryEngine) -> list[TaxonomyRefResponse]:
    """Sub-category ids referenced by at least one product, sorted."""
    return [
        TaxonomyRefResponse(id=s, name=engine.category_index.sub_category_name(s))
        for s in distinct_sub_category_ids(engine.products)
    ]
