"""Exception hierarchy for the storefront service.

Lookups that find nothing return None or an empty tuple; these exceptions
are reserved for precondition and configuration failures.
"""


class StorefrontError(Exception):
    """Base class for storefront errors."""


class CatalogNotInitializedError(StorefrontError):
    """Raised when the query engine is built without a store or taxonomy."""


class CategoryIndexError(StorefrontError):
    """Raised when a taxonomy definition is invalid (duplicate ids, bad shape)."""


class EmptyCartError(StorefrontError):
    """Raised when checkout is requested for a cart with no items."""
