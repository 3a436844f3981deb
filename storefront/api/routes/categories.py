"""Taxonomy endpoints."""

from fastapi import APIRouter, HTTPException, status

from storefront.api.deps import Taxonomy
from storefront.schemas.catalog import CategoryResponse, SubCategoryResponse

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(category_index: Taxonomy) -> list[CategoryResponse]:
    """All categories with their sub-categories, in declared order."""
    return [CategoryResponse.from_category(c) for c in category_index.categories]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, category_index: Taxonomy) -> CategoryResponse:
    category = category_index.category_by_id(category_id)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category not found: {category_id}",
        )
    return CategoryResponse.from_category(category)


@router.get("/{category_id}/sub-categories", response_model=list[SubCategoryResponse])
async def list_sub_categories(
    category_id: str, category_index: Taxonomy
) -> list[SubCategoryResponse]:
    """Sub-categories of a category; empty for unknown or leaf categories."""
    return [
        SubCategoryResponse.from_sub_category(s)
        for s in category_index.sub_categories_of(category_id)
    ]
