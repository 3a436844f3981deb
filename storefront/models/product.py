"""ProductRecord model - SQL rendition of the product collection."""

from typing import Any

from sqlalchemy import JSON, Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.models.base import Base, TimestampMixin


class ProductRecord(Base, TimestampMixin):
    """A stored product document.

    Category and sub-category columns hold either a single id or a list of
    ids, mirroring the document store. Soft-deleted rows have
    ``is_active = False``.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    brand: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False)
    original_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    image: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    category: Mapped[Any] = mapped_column(JSON, nullable=False)
    sub_category: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    stock_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    specifications: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True, default=dict)
    features: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    priority: Mapped[int | None] = mapped_column(Integer, nullable=True)
    videos: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    featured: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    def to_record(self) -> dict[str, Any]:
        """Return the raw camelCase record shape shared by all sources."""
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "description": self.description,
            "price": self.price,
            "originalPrice": self.original_price,
            "image": self.image,
            "category": self.category,
            "subCategory": self.sub_category,
            "inStock": self.in_stock,
            "stockCount": self.stock_count,
            "rating": self.rating,
            "reviews": self.reviews,
            "specifications": self.specifications or {},
            "features": self.features or [],
            "priority": self.priority,
            "videos": self.videos or [],
            "featured": self.featured,
        }

    def __repr__(self) -> str:
        return f"<ProductRecord(id='{self.id}', name='{self.name}')>"
