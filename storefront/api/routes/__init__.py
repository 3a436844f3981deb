"""API routes module."""

from storefront.api.routes.catalog import router as catalog_router
from storefront.api.routes.categories import router as categories_router
from storefront.api.routes.checkout import router as checkout_router
from storefront.api.routes.health import router as health_router
from storefront.api.routes.products import router as products_router

__all__ = [
    "catalog_router",
    "categories_router",
    "checkout_router",
    "health_router",
    "products_router",
]
