"""Product and taxonomy data contracts.

Products arrive as raw camelCase records from a product source and are
validated into :class:`Product`. ``category`` and ``subCategory`` may each be
a single id or a list of ids; every predicate normalizes them through
:func:`as_id_set` or :func:`primary_id`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, computed_field, field_validator
from pydantic.alias_generators import to_camel

CategoryRef = str | list[str]


def as_id_set(value: CategoryRef | None) -> frozenset[str]:
    """Normalize a scalar-or-list id field to a set of ids.

    Returns an empty set for None, a singleton for a scalar and the set of
    values for a list.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset((value,))
    return frozenset(value)


def primary_id(value: CategoryRef | None) -> str | None:
    """Return the first id of a list field, the scalar itself, or None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return value[0] if value else None


def as_id_list(value: CategoryRef | None) -> list[str]:
    """Like :func:`as_id_set`, but keeping declared order."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class Product(BaseModel):
    """A catalog entry as fetched from the product source.

    ``in_stock`` and ``stock_count`` are independent; neither is derived
    from the other. ``original_price`` is trusted as given.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    id: str = Field(min_length=1, description="Stable opaque identifier")
    name: str = Field(default="", description="Display name")
    brand: str = Field(default="", description="Brand name")
    description: str = Field(default="", description="Marketing description")
    price: float = Field(ge=0, description="Price in whole currency units")
    original_price: float | None = Field(
        default=None,
        description="Pre-discount price; absent means no discount is shown",
    )
    image: str = Field(default="", description="URI or path of the main image")
    category: CategoryRef = Field(description="Category id or ordered list of ids")
    sub_category: CategoryRef | None = Field(
        default=None,
        description="Sub-category id or ordered list of ids",
    )
    in_stock: bool = Field(default=False, description="Availability flag")
    stock_count: int = Field(default=0, ge=0, description="Units in stock")
    rating: float | None = Field(default=None, description="Average rating, 0-5")
    reviews: int = Field(default=0, ge=0, description="Number of reviews")
    specifications: dict[str, str] = Field(default_factory=dict)
    features: list[str] = Field(default_factory=list)
    priority: int | None = Field(
        default=None,
        description="Lower values sort earlier; absent sorts last",
    )
    videos: list[str] = Field(default_factory=list)
    featured: bool | None = Field(default=None, description="Explicitly curated")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: CategoryRef) -> CategoryRef:
        """Reject an empty category list."""
        if isinstance(v, list) and not v:
            raise ValueError("category list must not be empty")
        return v

    @field_validator("specifications", "features", "videos", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any, info: ValidationInfo) -> Any:
        """Treat null collections from the source as empty."""
        if v is None:
            return {} if info.field_name == "specifications" else []
        return v

    @field_validator(
        "name", "brand", "description", "image", "in_stock", "stock_count", "reviews",
        mode="before",
    )
    @classmethod
    def none_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Null display and stock fields fall back to the field default."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    @property
    def category_ids(self) -> frozenset[str]:
        return as_id_set(self.category)

    @property
    def sub_category_ids(self) -> frozenset[str]:
        return as_id_set(self.sub_category)

    @property
    def primary_category(self) -> str | None:
        return primary_id(self.category)

    @property
    def primary_sub_category(self) -> str | None:
        return primary_id(self.sub_category)

    @property
    def sort_priority(self) -> int:
        """Priority used for ordering; absent priority sorts last."""
        return self.priority if self.priority is not None else sys.maxsize

    @computed_field  # type: ignore[prop-decorator]
    @property
    def discount(self) -> float | None:
        """Amount saved, when the original price exceeds the price."""
        if self.original_price is not None and self.original_price > self.price:
            return self.original_price - self.price
        return None

    def in_category(self, category_id: str) -> bool:
        return category_id in self.category_ids

    def in_sub_category(self, sub_category_id: str) -> bool:
        return sub_category_id in self.sub_category_ids


@dataclass(frozen=True)
class SubCategory:
    """Second-level taxonomy node.

    ``parent_category`` is a back-reference by id, not ownership.
    """

    id: str
    name: str
    parent_category: str
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubCategory":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            parent_category=data.get("parent_category") or data.get("parentCategory", ""),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Category:
    """Top-level taxonomy node."""

    id: str
    name: str
    description: str = ""
    icon: str = ""
    sub_categories: tuple[SubCategory, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """Create from dictionary, without sub-categories."""
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            icon=data.get("icon", ""),
        )


@dataclass(frozen=True)
class CategoryFilter:
    """Category selection, optionally narrowed to one sub-category."""

    category: str
    sub_category: str | None = None
