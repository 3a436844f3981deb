"""Tests for shop listing: search, filters, sorting and pagination."""

import pytest

from storefront.catalog.listing import (
    DEFAULT_MAX_PRICE,
    ListingQuery,
    apply_listing,
    distinct_category_ids,
    distinct_sub_category_ids,
    matches_search,
    search_products,
    sort_products,
)
from storefront.catalog.types import Product

from tests.factories import make_record


def ids(products) -> list[str]:
    return [p.id for p in products]


class TestSearch:
    """Tests for free-text matching."""

    @pytest.mark.parametrize(
        "term,expected",
        [
            ("wrench", ["impact-wrench"]),
            ("AIRMAX", ["impact-wrench"]),
            ("  thinkcar ", ["thinkcar-pro"]),
            ("frame-pro description", ["frame-pro"]),
        ],
    )
    def test_matches_name_brand_or_description(self, products, term, expected):
        assert ids(p for p in products if matches_search(p, term)) == expected

    def test_blank_term_matches_everything(self, products):
        assert all(matches_search(p, "   ") for p in products)

    def test_search_products_matches_taxonomy_ids(self, products):
        assert ids(search_products(products, "diagnosticscanners")) == ["thinkcar-pro"]
        assert ids(search_products(products, "pneumatic")) == ["impact-wrench"]


class TestSortProducts:
    """Priority always wins; the sort key orders within a priority."""

    def test_sort_by_name(self, products):
        assert ids(sort_products(products, "name")) == [
            "spraybooth", "thinkcar-pro",
            "frame-pro", "impact-wrench", "mig-welder", "socket-set", "two-post-lift",
        ]

    def test_sort_by_price_low(self, products):
        assert ids(sort_products(products, "price-low")) == [
            "spraybooth", "thinkcar-pro",
            "socket-set", "impact-wrench", "mig-welder", "two-post-lift", "frame-pro",
        ]

    def test_sort_by_price_high(self, products):
        assert ids(sort_products(products, "price-high")) == [
            "spraybooth", "thinkcar-pro",
            "frame-pro", "two-post-lift", "mig-welder", "impact-wrench", "socket-set",
        ]

    def test_sort_by_rating_treats_missing_as_zero(self, products):
        assert ids(sort_products(products, "rating")) == [
            "spraybooth", "thinkcar-pro",
            "two-post-lift", "frame-pro", "mig-welder", "socket-set", "impact-wrench",
        ]

    def test_unknown_sort_key_falls_back_to_name(self, products):
        assert sort_products(products, "bogus") == sort_products(products, "name")

    def test_priority_ordering_lowest_first(self):
        products = [
            Product.model_validate(make_record("late", "x", priority=10, name="A")),
            Product.model_validate(make_record("none", "x", name="A")),
            Product.model_validate(make_record("early", "x", priority=0, name="Z")),
        ]

        assert ids(sort_products(products)) == ["early", "late", "none"]


class TestApplyListing:
    """Tests for the combined shop listing."""

    def test_defaults_return_everything(self, products):
        page = apply_listing(products, ListingQuery())

        assert page.total == len(products)
        assert page.page == 1
        assert page.pages == 1
        assert ids(page.items) == ids(sort_products(products))

    def test_category_filter(self, products):
        page = apply_listing(products, ListingQuery(category="handtools"))

        assert ids(page.items) == ["impact-wrench", "socket-set"]

    def test_sub_category_filter(self, products):
        page = apply_listing(products, ListingQuery(sub_category="air-tools"))

        assert ids(page.items) == ["impact-wrench"]

    def test_price_range_inclusive(self, products):
        page = apply_listing(products, ListingQuery(min_price=650_000, max_price=850_000))

        assert ids(page.items) == ["thinkcar-pro", "mig-welder"]

    def test_default_max_price_excludes_above_ceiling(self):
        products = [
            Product.model_validate(make_record("ok", "x", price=DEFAULT_MAX_PRICE)),
            Product.model_validate(make_record("too-dear", "x", price=DEFAULT_MAX_PRICE + 1)),
        ]

        assert ids(apply_listing(products, ListingQuery()).items) == ["ok"]

    def test_filters_combine(self, products):
        query = ListingQuery(search="lift", category="garagetools", sort="price-high")

        assert ids(apply_listing(products, query).items) == ["two-post-lift"]

    def test_pagination(self, products):
        first = apply_listing(products, ListingQuery(page_size=3))
        last = apply_listing(products, ListingQuery(page_size=3, page=3))

        assert first.pages == 3
        assert ids(first.items) == ["spraybooth", "thinkcar-pro", "frame-pro"]
        assert ids(last.items) == ["two-post-lift"]
        assert last.total == 7

    def test_page_past_end_is_empty(self, products):
        page = apply_listing(products, ListingQuery(page_size=3, page=9))

        assert page.items == ()
        assert page.page == 9

    def test_no_matches(self, products):
        page = apply_listing(products, ListingQuery(search="hovercraft", page_size=5))

        assert page.items == ()
        assert page.total == 0
        assert (page.page, page.pages) == (1, 1)

    def test_empty_catalog_is_one_empty_page(self):
        page = apply_listing((), ListingQuery(page_size=5))

        assert page.items == ()
        assert (page.page, page.pages) == (1, 1)


class TestDistinctIds:
    def test_distinct_category_ids(self, products):
        assert distinct_category_ids(products) == [
            "bodyparts", "diagnosticscanners", "garagetools", "handtools", "spraybooth",
        ]

    def test_distinct_sub_category_ids(self, products):
        assert distinct_sub_category_ids(products) == [
            "air-tools", "frame-machines", "lifting-equipment", "paint-booths",
            "pneumatic-tools", "thinkcar", "welding-equipment",
        ]
