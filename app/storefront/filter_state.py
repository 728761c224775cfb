"""
Listing filter state and its URL form.

``FilterState.defaults`` is the only place default values are defined; both
``encode_filter_state`` and ``decode_filter_state`` compare against it, so a
field equal to its default never appears in the URL and a missing parameter
always decodes to the default.
"""
import math
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union
from urllib.parse import parse_qs

from app.products.constants import (
    CATEGORY_PATTERN,
    DEFAULT_SORT,
    PRODUCT_FILTER_KEYS,
    SORT_OPTIONS,
)

_CATEGORY_RE = re.compile(CATEGORY_PATTERN)

# URL parameters in the order they are written
URL_KEYS = (
    PRODUCT_FILTER_KEYS["CATEGORIES"],
    PRODUCT_FILTER_KEYS["MIN_PRICE"],
    PRODUCT_FILTER_KEYS["MAX_PRICE"],
    PRODUCT_FILTER_KEYS["IN_STOCK"],
    PRODUCT_FILTER_KEYS["FEATURED"],
    PRODUCT_FILTER_KEYS["PAGE"],
    PRODUCT_FILTER_KEYS["SORT"],
)


@dataclass(frozen=True)
class PriceBounds:
    """Observed effective-price range of the catalog"""

    min: int
    max: int

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "PriceBounds":
        low = max(0, math.floor(float(data.get("min") or 0)))
        high = math.ceil(float(data.get("max") or 0))
        # an empty or single-price catalog still needs min < max
        if high <= low:
            high = low + 1
        return cls(min=low, max=high)

    def clamp(self, low: Optional[int], high: Optional[int]):
        """Fit a price window into the bounds

        Missing ends take the bound, reversed ends are swapped, and a window
        that collapses to nothing falls back to the full range.
        """
        low = self.min if low is None else low
        high = self.max if high is None else high
        if low > high:
            low, high = high, low
        low = min(max(low, self.min), self.max)
        high = min(max(high, self.min), self.max)
        if low >= high:
            return self.min, self.max
        return low, high


@dataclass(frozen=True)
class FilterState:
    categories: FrozenSet[str] = field(default_factory=frozenset)
    min_price: int = 0
    max_price: int = 0
    in_stock: bool = False
    featured: bool = False
    page: int = 1
    sort: str = DEFAULT_SORT

    @classmethod
    def defaults(cls, bounds: PriceBounds) -> "FilterState":
        return cls(
            categories=frozenset(),
            min_price=bounds.min,
            max_price=bounds.max,
            in_stock=False,
            featured=False,
            page=1,
            sort=DEFAULT_SORT,
        )

    def normalized(self, bounds: PriceBounds) -> "FilterState":
        """Same state with every field forced into its valid domain"""
        low, high = bounds.clamp(self.min_price, self.max_price)
        return replace(
            self,
            categories=frozenset(valid_categories(self.categories)),
            min_price=low,
            max_price=high,
            page=self.page if isinstance(self.page, int) and self.page >= 1 else 1,
            sort=self.sort if self.sort in SORT_OPTIONS else DEFAULT_SORT,
        )

    def with_category_toggled(self, slug: str) -> "FilterState":
        categories = set(self.categories)
        if slug in categories:
            categories.discard(slug)
        else:
            categories.add(slug)
        return replace(self, categories=frozenset(categories), page=1)


def valid_categories(values: Iterable[str]):
    for value in values:
        value = (value or "").strip()
        if value and _CATEGORY_RE.match(value):
            yield value


def _parse_int(value) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _first_values(query: Union[str, Mapping[str, Any], None]) -> Dict[str, str]:
    if query is None:
        return {}
    if isinstance(query, str):
        return {k: v[0] for k, v in parse_qs(query.lstrip("?")).items() if v}
    return {k: query.get(k) for k in URL_KEYS if query.get(k) is not None}


def encode_filter_state(state: FilterState, bounds: PriceBounds) -> Dict[str, str]:
    """URL parameters for every field that differs from its default"""
    defaults = FilterState.defaults(bounds)
    params = {}
    if state.categories != defaults.categories:
        params[PRODUCT_FILTER_KEYS["CATEGORIES"]] = ",".join(sorted(state.categories))
    if state.min_price != defaults.min_price:
        params[PRODUCT_FILTER_KEYS["MIN_PRICE"]] = str(state.min_price)
    if state.max_price != defaults.max_price:
        params[PRODUCT_FILTER_KEYS["MAX_PRICE"]] = str(state.max_price)
    if state.in_stock != defaults.in_stock:
        params[PRODUCT_FILTER_KEYS["IN_STOCK"]] = "true"
    if state.featured != defaults.featured:
        params[PRODUCT_FILTER_KEYS["FEATURED"]] = "true"
    if state.page != defaults.page:
        params[PRODUCT_FILTER_KEYS["PAGE"]] = str(state.page)
    if state.sort != defaults.sort:
        params[PRODUCT_FILTER_KEYS["SORT"]] = state.sort
    return params


def decode_filter_state(
    query: Union[str, Mapping[str, Any], None], bounds: PriceBounds
) -> FilterState:
    """Rebuild a FilterState from URL parameters, defaulting anything absent or invalid"""
    values = _first_values(query)
    defaults = FilterState.defaults(bounds)

    raw_categories = values.get(PRODUCT_FILTER_KEYS["CATEGORIES"]) or ""
    state = FilterState(
        categories=frozenset(raw_categories.split(",")),
        min_price=_parse_int(values.get(PRODUCT_FILTER_KEYS["MIN_PRICE"])),
        max_price=_parse_int(values.get(PRODUCT_FILTER_KEYS["MAX_PRICE"])),
        in_stock=values.get(PRODUCT_FILTER_KEYS["IN_STOCK"]) == "true",
        featured=values.get(PRODUCT_FILTER_KEYS["FEATURED"]) == "true",
        page=_parse_int(values.get(PRODUCT_FILTER_KEYS["PAGE"])) or defaults.page,
        sort=values.get(PRODUCT_FILTER_KEYS["SORT"]) or defaults.sort,
    )
    return state.normalized(bounds)


def request_params(state: FilterState, page_size: int) -> Dict[str, str]:
    """Listing API parameters carrying the full state"""
    params = {
        PRODUCT_FILTER_KEYS["PAGE"]: str(state.page),
        PRODUCT_FILTER_KEYS["LIMIT"]: str(page_size),
        PRODUCT_FILTER_KEYS["MIN_PRICE"]: str(state.min_price),
        PRODUCT_FILTER_KEYS["MAX_PRICE"]: str(state.max_price),
        PRODUCT_FILTER_KEYS["SORT"]: state.sort,
    }
    if state.categories:
        params[PRODUCT_FILTER_KEYS["CATEGORIES"]] = ",".join(sorted(state.categories))
    if state.in_stock:
        params[PRODUCT_FILTER_KEYS["IN_STOCK"]] = "true"
    if state.featured:
        params[PRODUCT_FILTER_KEYS["FEATURED"]] = "true"
    return params
