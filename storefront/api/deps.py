"""FastAPI dependencies for dependency injection.

Provides:
- The process-wide Catalog Store
- The static Category Index
- A query engine bound to both
"""

from typing import Annotated

from fastapi import Depends

from storefront.catalog.category_index import CategoryIndex, load_category_index
from storefront.catalog.query import CatalogQueryEngine
from storefront.catalog.store import CatalogStore, get_catalog_store


def get_store() -> CatalogStore:
    """Get the catalog store dependency."""
    return get_catalog_store()


def get_category_index() -> CategoryIndex:
    """Get the category index dependency."""
    return load_category_index()


def get_query_engine(
    store: Annotated[CatalogStore, Depends(get_store)],
    category_index: Annotated[CategoryIndex, Depends(get_category_index)],
) -> CatalogQueryEngine:
    """Build a query engine over the current store and taxonomy."""
    return CatalogQueryEngine(store, category_index)


# Type aliases for cleaner annotations
Store = Annotated[CatalogStore, Depends(get_store)]
Taxonomy = Annotated[CategoryIndex, Depends(get_category_index)]
QueryEngine = Annotated[CatalogQueryEngine, Depends(get_query_engine)]
