"""Infrastructure - Database and logging."""

from storefront.infra.database import close_db_engine, get_db_session
from storefront.infra.logging import get_logger, setup_logging

__all__ = [
    "close_db_engine",
    "get_db_session",
    "get_logger",
    "setup_logging",
]
