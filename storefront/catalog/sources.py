"""Product sources - where the Catalog Store fetches raw records from.

Every source returns the same shape: a list of camelCase product records
(``id``, ``name``, ``price``, ``category``, ``subCategory``, ...). Sources
raise on failure; the store decides what a failed fetch means.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import httpx
import yaml
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import Settings, settings as default_settings
from storefront.infra.logging import get_logger
from storefront.models.product import ProductRecord

logger = get_logger(__name__)

RawRecord = dict[str, Any]


@runtime_checkable
class ProductSource(Protocol):
    """Anything that can return the full list of raw product records."""

    async def fetch_records(self) -> list[RawRecord]: ...


class DocumentStoreSource:
    """HTTP client for the hosted product document collection.

    Accepts either a bare JSON list of records or a ``{"documents": [...]}``
    envelope whose entries may be ``{"id": ..., "data": {...}}`` documents.
    Soft-deleted records (``isActive == false``) are dropped.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        collection: str = "products",
    ) -> None:
        self.base_url = base_url or default_settings.document_store_url
        self.api_key = api_key if api_key is not None else default_settings.document_store_api_key
        self.timeout = timeout or default_settings.document_store_timeout
        self.collection = collection
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_records(self) -> list[RawRecord]:
        """Fetch every active product document.

        Raises:
            httpx.HTTPError: On transport failures or non-2xx responses
            ValueError: If the payload is not a list or document envelope
        """
        client = await self._get_client()
        response = await client.get(f"/{self.collection}")
        response.raise_for_status()

        payload = response.json()
        if isinstance(payload, dict):
            payload = payload.get("documents")
        if not isinstance(payload, list):
            raise ValueError("Unexpected document store payload")

        records = [self._flatten(doc) for doc in payload if isinstance(doc, dict)]
        active = [r for r in records if r.get("isActive", True) is not False]

        logger.debug(
            "Fetched product documents",
            collection=self.collection,
            total=len(records),
            active=len(active),
        )
        return active

    @staticmethod
    def _flatten(document: RawRecord) -> RawRecord:
        """Merge ``{"id", "data"}`` documents into a single record."""
        data = document.get("data")
        if isinstance(data, dict):
            return {**data, "id": document.get("id", data.get("id"))}
        return document


class DatabaseProductSource:
    """Reads active products from the SQL ``products`` table, newest first."""

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]] | None = None,
    ) -> None:
        if session_factory is None:
            from storefront.infra.database import get_db_session

            session_factory = get_db_session
        self._session_factory = session_factory

    async def fetch_records(self) -> list[RawRecord]:
        query = (
            select(ProductRecord)
            .where(ProductRecord.is_active.is_(True))
            .order_by(ProductRecord.created_at.desc())
        )
        async with self._session_factory() as session:
            result = await session.execute(query)
            rows = result.scalars().all()

        return [row.to_record() for row in rows]


class StaticProductSource:
    """Records held in memory or read from a YAML/JSON file.

    Used for local development and tests. A file is re-read on every fetch
    so edits show up on the next refetch.
    """

    def __init__(
        self,
        records: list[RawRecord] | None = None,
        path: str | Path | None = None,
    ) -> None:
        if records is None and path is None:
            raise ValueError("StaticProductSource needs records or a path")
        self._records = list(records) if records is not None else None
        self._path = Path(path) if path is not None else None

    async def fetch_records(self) -> list[RawRecord]:
        if self._records is not None:
            return [dict(r) for r in self._records]

        assert self._path is not None
        content = self._path.read_text(encoding="utf-8")
        if self._path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)

        if isinstance(data, dict):
            data = data.get("products", [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of products in {self._path}")
        return data


def build_product_source(config: Settings | None = None) -> ProductSource:
    """Create the product source selected by ``catalog_source``."""
    config = config or default_settings

    if config.catalog_source == "database":
        return DatabaseProductSource()
    if config.catalog_source == "file":
        return StaticProductSource(path=config.catalog_file)
    return DocumentStoreSource(
        base_url=config.document_store_url,
        api_key=config.document_store_api_key,
        timeout=config.document_store_timeout,
    )
