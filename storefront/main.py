"""FastAPI application entry point.

Storefront catalog service: taxonomy, product browsing and checkout
handoff over a periodically refreshed in-memory catalog.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.catalog.category_index import load_category_index
from storefront.catalog.sources import DocumentStoreSource
from storefront.catalog.store import get_catalog_store
from storefront.config import settings
from storefront.errors import EmptyCartError
from storefront.infra.database import close_db_engine, verify_db_connection
from storefront.infra.logging import get_logger, setup_logging
from storefront.schemas.common import ErrorResponse

from storefront.api.routes.catalog import router as catalog_router
from storefront.api.routes.categories import router as categories_router
from storefront.api.routes.checkout import router as checkout_router
from storefront.api.routes.health import router as health_router
from storefront.api.routes.products import router as products_router

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Load the category index (fails fast on an invalid taxonomy)
    - Fetch the catalog once
    - Optionally start the periodic refresh loop

    Shutdown:
    - Stop the refresh loop
    - Close HTTP clients and database connections
    """
    logger.info(
        "Storefront starting",
        environment=settings.environment,
        catalog_source=settings.catalog_source,
    )

    category_index = load_category_index()
    logger.info("Category index ready", categories=len(category_index))

    if settings.catalog_source == "database":
        db_ok = await verify_db_connection()
        if not db_ok:
            logger.warning("Database connection failed - catalog will report an error")

    store = get_catalog_store()
    await store.refetch()
    if store.error:
        logger.warning("Initial catalog fetch failed", error=store.error)

    if settings.catalog_refresh_interval_seconds > 0:
        await store.start_refresh_loop(settings.catalog_refresh_interval_seconds)

    yield

    logger.info("Storefront shutting down")
    await store.stop()
    if isinstance(store.source, DocumentStoreSource):
        await store.source.close()
    await close_db_engine()
    logger.info("Cleanup complete")


app = FastAPI(
    title="Garutech Storefront",
    description="Product catalog, category browsing and checkout handoff",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "dev" else None,
    redoc_url=None,
)

if settings.environment == "dev":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(EmptyCartError)
async def empty_cart_handler(request: Request, exc: EmptyCartError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=str(exc), error_type=type(exc).__name__).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log uncaught exceptions and return a structured 500."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            error_type=type(exc).__name__,
        ).model_dump(),
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(catalog_router, prefix="/catalog", tags=["Catalog"])
app.include_router(categories_router, prefix="/categories", tags=["Categories"])
app.include_router(products_router, prefix="/products", tags=["Products"])
app.include_router(checkout_router, prefix="/checkout", tags=["Checkout"])


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": "Garutech Storefront",
        "version": __version__,
        "environment": settings.environment,
    }
