"""Catalog response schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.catalog.category_index import CategoryIndex
from storefront.catalog.types import Category, Product, SubCategory, as_id_list


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubCategoryResponse(CamelModel):
    id: str
    name: str
    parent_category: str
    description: str | None = None

    @classmethod
    def from_sub_category(cls, sub: SubCategory) -> "SubCategoryResponse":
        return cls(
            id=sub.id,
            name=sub.name,
            parent_category=sub.parent_category,
            description=sub.description,
        )


class CategoryResponse(CamelModel):
    id: str
    name: str
    description: str
    icon: str
    sub_categories: list[SubCategoryResponse] = Field(default_factory=list)

    @classmethod
    def from_category(cls, category: Category) -> "CategoryResponse":
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            icon=category.icon,
            sub_categories=[
                SubCategoryResponse.from_sub_category(s) for s in category.sub_categories
            ],
        )


class CatalogStatusResponse(CamelModel):
    """Catalog Store passthrough fields."""

    loading: bool
    error: str | None = None
    count: int = Field(description="Number of products in the current snapshot")


class ProductView(Product):
    """Product with its taxonomy ids resolved to display names.

    Ids missing from the taxonomy are shown as-is.
    """

    category_names: list[str] = Field(default_factory=list)
    sub_category_names: list[str] = Field(default_factory=list)

    @classmethod
    def from_product(cls, product: Product, category_index: CategoryIndex) -> "ProductView":
        return cls.model_validate({
            **product.model_dump(),
            "category_names": [
                category_index.category_name(c) for c in as_id_list(product.category)
            ],
            "sub_category_names": [
                category_index.sub_category_name(s) for s in as_id_list(product.sub_category)
            ],
        })


class TaxonomyRefResponse(CamelModel):
    """An id referenced by the catalog, with its display name."""

    id: str
    name: str


class ProductListResponse(CamelModel):
    items: list[ProductView]
    total: int
    page: int = 1
    pages: int = 1
