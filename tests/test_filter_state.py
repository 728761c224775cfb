import pytest

from app.storefront.filter_state import (
    FilterState,
    PriceBounds,
    decode_filter_state,
    encode_filter_state,
    request_params,
)
from app.storefront.history import BrowserHistory

BOUNDS = PriceBounds(min=80, max=500)


def test_defaults_come_from_the_bounds():
    state = FilterState.defaults(BOUNDS)

    assert state.min_price == 80
    assert state.max_price == 500
    assert state.categories == frozenset()
    assert state.page == 1
    assert state.sort == "name"


def test_default_state_encodes_to_nothing():
    assert encode_filter_state(FilterState.defaults(BOUNDS), BOUNDS) == {}


def test_only_non_default_fields_are_encoded():
    state = FilterState(
        categories=frozenset({"galdi", "divani"}),
        min_price=80,
        max_price=300,
        in_stock=True,
        featured=False,
        page=1,
        sort="price_desc",
    )

    assert encode_filter_state(state, BOUNDS) == {
        "categories": "divani,galdi",
        "maxPrice": "300",
        "inStock": "true",
        "sort": "price_desc",
    }


@pytest.mark.parametrize(
    "state",
    [
        FilterState(frozenset({"divani"}), 100, 400, True, True, 3, "price_asc"),
        FilterState(frozenset({"a", "b-2", "C3"}), 80, 500, False, True, 1, "featured"),
        FilterState(frozenset(), 81, 499, False, False, 12, "created_at"),
    ],
)
def test_decode_reverses_encode(state):
    history = BrowserHistory("/products")
    history.replace("/products", encode_filter_state(state, BOUNDS))

    assert decode_filter_state(history.query, BOUNDS) == state


def test_decode_accepts_mappings():
    state = decode_filter_state({"categories": "divani", "page": "2"}, BOUNDS)

    assert state.categories == frozenset({"divani"})
    assert state.page == 2


class TestDecodeFallsBackToDefaults:
    def test_empty_query(self):
        assert decode_filter_state("", BOUNDS) == FilterState.defaults(BOUNDS)

    def test_garbage_values(self):
        state = decode_filter_state(
            "?page=-2&sort=bogus&minPrice=abc&inStock=1&categories=ok,bad%27value,",
            BOUNDS,
        )

        assert state.page == 1
        assert state.sort == "name"
        assert state.min_price == 80
        assert state.in_stock is False
        assert state.categories == frozenset({"ok"})

    def test_prices_are_clamped_into_bounds(self):
        state = decode_filter_state("minPrice=0&maxPrice=999999", BOUNDS)

        assert (state.min_price, state.max_price) == (80, 500)

    def test_reversed_prices_are_swapped(self):
        state = decode_filter_state("minPrice=400&maxPrice=100", BOUNDS)

        assert (state.min_price, state.max_price) == (100, 400)

    def test_empty_window_resets_to_bounds(self):
        state = decode_filter_state("minPrice=200&maxPrice=200", BOUNDS)

        assert (state.min_price, state.max_price) == (80, 500)


class TestPriceBounds:
    def test_from_payload_rounds_outwards(self):
        assert PriceBounds.from_payload({"min": 79.5, "max": 499.2}) == PriceBounds(79, 500)

    def test_degenerate_range_is_widened(self):
        assert PriceBounds.from_payload({"min": 0, "max": 0}) == PriceBounds(0, 1)


def test_request_params_carry_the_full_state():
    state = FilterState(frozenset({"galdi"}), 80, 500, True, False, 2, "name")

    assert request_params(state, page_size=12) == {
        "page": "2",
        "limit": "12",
        "minPrice": "80",
        "maxPrice": "500",
        "sort": "name",
        "categories": "galdi",
        "inStock": "true",
    }


def test_history_replace_does_not_grow_the_stack():
    history = BrowserHistory("/products?page=2")
    history.replace("/products", {"categories": "a,b"})

    assert history.entries == [("/products", "categories=a,b")]
    assert history.url == "/products?categories=a,b"

    history.replace("/products", {})
    assert history.url == "/products"
