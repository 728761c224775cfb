import pytest

from app.libs.pagination import Paginator
from app.products.models import ProductStatus
from app.products.query import (
    ProductListQuery,
    escape_like,
    normalize_search,
    price_window,
    valid_category_ids,
)


@pytest.mark.parametrize(
    "requested, expected",
    [(None, 12), (10000, 50), (50, 50), (-5, 1), (0, 1), (7, 7)],
)
def test_limit_is_clamped(requested, expected):
    query = ProductListQuery.from_args({"limit": requested})

    assert query.limit == expected


@pytest.mark.parametrize("requested", [None, 0, -3])
def test_invalid_page_becomes_first_page(requested):
    assert ProductListQuery.from_args({"page": requested}).page == 1


def test_paginator_offset():
    assert Paginator.clamp_page(3) == 3
    assert Paginator(query=None, page=3, limit=20).offset == 40


def test_huge_page_stops_at_the_offset_ceiling():
    paginator = Paginator(query=None, page=10**23, limit=50)

    assert paginator.offset <= Paginator.MAX_OFFSET
    assert paginator.page == Paginator.MAX_OFFSET // 50 + 1


class TestSearch:
    def test_escapes_like_metacharacters(self):
        assert escape_like("100%") == "100\\%"
        assert escape_like("a_b") == "a\\_b"
        assert escape_like("c:\\dir") == "c:\\\\dir"

    def test_trims_and_truncates(self):
        assert normalize_search("  sofa  ") == "sofa"
        assert len(normalize_search("x" * 250)) == 100

    def test_blank_search_is_ignored(self):
        assert normalize_search("   ") is None
        assert ProductListQuery.from_args({"search": ""}).search is None


class TestCategories:
    def test_invalid_values_are_dropped(self):
        assert valid_category_ids("divani", "galdi,drop';--,  kresli ") == (
            "divani",
            "galdi",
            "kresli",
        )

    def test_duplicates_collapse(self):
        assert valid_category_ids("divani", "divani,galdi") == ("divani", "galdi")

    def test_from_args_merges_category_and_categories(self):
        query = ProductListQuery.from_args({"category": "bad value", "categories": "galdi"})

        assert query.categories == ("galdi",)


class TestPriceWindow:
    def test_applied_when_consistent(self):
        assert price_window(0, 100) == (0, 100)

    @pytest.mark.parametrize(
        "low, high", [(50, 10), (10, 10), (-1, 100), (None, 100), (10, None)]
    )
    def test_skipped_when_inconsistent(self, low, high):
        assert price_window(low, high) is None

    def test_huge_bounds_are_capped(self):
        assert price_window(0, 10**23) == (0, 10**8)
        assert price_window(10**22, 10**23) == (10**8, 10**8)


class TestSortAndFlags:
    def test_unknown_sort_falls_back_to_name(self):
        assert ProductListQuery.from_args({"sort": "bogus"}).sort == "name"

    def test_flags_need_literal_true(self):
        query = ProductListQuery.from_args({"in_stock": "1", "featured": "true"})

        assert query.in_stock is False
        assert query.featured is True

    def test_group_id_is_a_subcategory_alias(self):
        query = ProductListQuery.from_args({"group_id": "sub-1"})

        assert query.subcategory == "sub-1"

    def test_subcategory_wins_over_group_id(self):
        query = ProductListQuery.from_args({"subcategory": "a", "group_id": "b"})

        assert query.subcategory == "a"

    def test_ordering_always_ends_with_id(self):
        for sort in ("name", "price_asc", "price_desc", "created_at", "featured"):
            ordering = ProductListQuery(sort=sort).ordering()
            assert "id" in str(ordering[-1])


class TestStatusVisibility:
    def test_public_callers_only_see_active(self):
        query = ProductListQuery.from_args({"status": "inactive"}, is_admin=False)

        assert query.status is ProductStatus.ACTIVE

    def test_admin_may_pick_status(self):
        query = ProductListQuery.from_args({"status": "inactive"}, is_admin=True)

        assert query.status is ProductStatus.INACTIVE

    def test_admin_without_status_sees_everything(self):
        query = ProductListQuery.from_args({}, is_admin=True)

        assert query.status is None
