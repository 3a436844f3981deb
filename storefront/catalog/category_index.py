"""Category Index - static two-level product taxonomy.

The taxonomy is loaded once from YAML:
1. ``settings.taxonomy_path`` when configured
2. The packaged default (``storefront/data/taxonomy.yaml``)

The index is immutable after construction and is passed explicitly to the
query engine, so tests can build their own taxonomies.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from storefront.catalog.types import Category, SubCategory
from storefront.config import settings
from storefront.errors import CategoryIndexError
from storefront.infra.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TAXONOMY_PATH = Path(__file__).parent.parent / "data" / "taxonomy.yaml"


class CategoryIndex:
    """Immutable lookup tables over categories and sub-categories.

    Each category's ``sub_categories`` is rebuilt from the sub-categories
    that name it as ``parent_category``, in declared order. Sub-categories
    with an unknown parent stay resolvable by id but are attached nowhere.
    """

    __slots__ = ("_categories", "_category_by_id", "_sub_category_by_id", "_children")

    def __init__(
        self,
        categories: Iterable[Category],
        sub_categories: Iterable[SubCategory] = (),
    ) -> None:
        subs = tuple(sub_categories)
        sub_by_id: dict[str, SubCategory] = {}
        children: dict[str, list[SubCategory]] = {}
        for sub in subs:
            if sub.id in sub_by_id:
                raise CategoryIndexError(f"Duplicate sub-category id: {sub.id}")
            sub_by_id[sub.id] = sub
            children.setdefault(sub.parent_category, []).append(sub)

        cats: list[Category] = []
        cat_by_id: dict[str, Category] = {}
        for cat in categories:
            if cat.id in cat_by_id:
                raise CategoryIndexError(f"Duplicate category id: {cat.id}")
            linked = Category(
                id=cat.id,
                name=cat.name,
                description=cat.description,
                icon=cat.icon,
                sub_categories=tuple(children.get(cat.id, ())),
            )
            cats.append(linked)
            cat_by_id[cat.id] = linked

        self._categories: tuple[Category, ...] = tuple(cats)
        self._category_by_id = MappingProxyType(cat_by_id)
        self._sub_category_by_id = MappingProxyType(sub_by_id)
        self._children = MappingProxyType(
            {parent: tuple(items) for parent, items in children.items()}
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryIndex":
        """Build an index from a parsed taxonomy document."""
        if not isinstance(data, dict):
            raise CategoryIndexError("Taxonomy must be a mapping")
        try:
            categories = [Category.from_dict(c) for c in data.get("categories") or []]
            sub_categories = [
                SubCategory.from_dict(s) for s in data.get("sub_categories") or []
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise CategoryIndexError(f"Invalid taxonomy entry: {e}") from e
        return cls(categories, sub_categories)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "CategoryIndex":
        """Parse YAML content into a CategoryIndex."""
        return cls.from_dict(yaml.safe_load(yaml_content) or {})

    @property
    def categories(self) -> tuple[Category, ...]:
        """All categories in declared order."""
        return self._categories

    @property
    def sub_categories(self) -> tuple[SubCategory, ...]:
        """All sub-categories in declared order."""
        return tuple(self._sub_category_by_id.values())

    def sub_categories_of(self, category_id: str) -> tuple[SubCategory, ...]:
        """Sub-categories whose parent is ``category_id``; empty when none."""
        return self._children.get(category_id, ())

    def category_by_id(self, category_id: str) -> Category | None:
        return self._category_by_id.get(category_id)

    def sub_category_by_id(self, sub_category_id: str) -> SubCategory | None:
        return self._sub_category_by_id.get(sub_category_id)

    def category_name(self, category_id: str) -> str:
        """Display name for a category, or the raw id when unknown."""
        category = self.category_by_id(category_id)
        return category.name if category else category_id

    def sub_category_name(self, sub_category_id: str) -> str:
        """Display name for a sub-category, or the raw id when unknown."""
        sub = self.sub_category_by_id(sub_category_id)
        return sub.name if sub else sub_category_id

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return (
            f"<CategoryIndex(categories={len(self._categories)}, "
            f"sub_categories={len(self._sub_category_by_id)})>"
        )


@lru_cache
def load_category_index(path: str | None = None) -> CategoryIndex:
    """Load the taxonomy once per process.

    Args:
        path: Taxonomy YAML path. Defaults to ``settings.taxonomy_path`` or
            the packaged taxonomy.

    Raises:
        FileNotFoundError: If the configured file does not exist
        CategoryIndexError: If the taxonomy is invalid
    """
    taxonomy_path = Path(path or settings.taxonomy_path or DEFAULT_TAXONOMY_PATH)
    if not taxonomy_path.exists():
        raise FileNotFoundError(f"Taxonomy not found: {taxonomy_path}")

    index = CategoryIndex.from_yaml(taxonomy_path.read_text(encoding="utf-8"))
    logger.info(
        "Category index loaded",
        path=str(taxonomy_path),
        categories=len(index.categories),
        sub_categories=len(index.sub_categories),
    )
    return index
