"""Catalog core - taxonomy, product store and query engine."""

from storefront.catalog.category_index import CategoryIndex, load_category_index
from storefront.catalog.listing import ListingPage, ListingQuery, apply_listing
from storefront.catalog.query import CatalogQueryEngine
from storefront.catalog.store import CatalogSnapshot, CatalogStore, get_catalog_store
from storefront.catalog.types import (
    Category,
    CategoryFilter,
    Product,
    SubCategory,
    as_id_set,
    primary_id,
)

__all__ = [
    "CatalogQueryEngine",
    "CatalogSnapshot",
    "CatalogStore",
    "Category",
    "CategoryFilter",
    "CategoryIndex",
    "ListingPage",
    "ListingQuery",
    "Product",
    "SubCategory",
    "apply_listing",
    "as_id_set",
    "get_catalog_store",
    "load_category_index",
    "primary_id",
]
