"""Pydantic schemas for request/response validation."""

from storefront.schemas.catalog import (
    CatalogStatusResponse,
    CategoryResponse,
    ProductListResponse,
    ProductView,
    SubCategoryResponse,
    TaxonomyRefResponse,
)
from storefront.schemas.checkout import CheckoutLine, CheckoutRequest, CheckoutResponse
from storefront.schemas.common import ErrorResponse, HealthResponse

__all__ = [
    "CatalogStatusResponse",
    "CategoryResponse",
    "CheckoutLine",
    "CheckoutRequest",
    "CheckoutResponse",
    "ErrorResponse",
    "HealthResponse",
    "ProductListResponse",
    "ProductView",
    "SubCategoryResponse",
    "TaxonomyRefResponse",
]
