"""
Product listing query construction.

Raw query-string values are untrusted: pagination is clamped, the search
term is bounded and LIKE-escaped, category identifiers are pattern checked
and dropped when they fail, inconsistent price bounds disable the price
filter, and unknown sort keys fall back to name order. Nothing here raises on
bad input.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from sqlalchemy import and_, or_, select
from sqlalchemy.sql import Select

from app.libs.pagination import Paginator
from app.navigation.models import NavigationCategory

from .constants import (
    CATEGORY_PATTERN,
    DEFAULT_SORT,
    LIKE_ESCAPE_CHAR,
    PRICE_CEILING,
    SEARCH_MAX_LENGTH,
    SORT_OPTIONS,
)
from .models import Product, ProductStatus

_CATEGORY_RE = re.compile(CATEGORY_PATTERN)


def escape_like(term: str, escape: str = LIKE_ESCAPE_CHAR) -> str:
    """Escape LIKE metacharacters so the term only ever matches literally"""
    return (
        term.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )


def normalize_search(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    term = str(raw).strip()[:SEARCH_MAX_LENGTH]
    return term or None


def valid_category_ids(*raw_values: Optional[str]) -> Tuple[str, ...]:
    """Collect category identifiers, dropping any that fail the pattern"""
    ids = []
    for raw in raw_values:
        if not raw:
            continue
        for value in str(raw).split(","):
            value = value.strip()
            if value and _CATEGORY_RE.match(value) and value not in ids:
                ids.append(value)
    return tuple(ids)


def price_window(
    min_price: Optional[int], max_price: Optional[int]
) -> Optional[Tuple[int, int]]:
    """Price bounds to filter on, or None when they are unusable"""
    if min_price is None or max_price is None:
        return None
    if min_price < 0 or max_price <= min_price:
        return None
    return min(min_price, PRICE_CEILING), min(max_price, PRICE_CEILING)


def _parse_status(raw: Optional[str]) -> Optional[ProductStatus]:
    try:
        return ProductStatus(raw) if raw else None
    except ValueError:
        return None


@dataclass(frozen=True)
class ProductListQuery:
    page: int = 1
    limit: int = Paginator.DEFAULT_LIMIT
    search: Optional[str] = None
    categories: Tuple[str, ...] = field(default_factory=tuple)
    subcategory: Optional[str] = None
    price_range: Optional[Tuple[int, int]] = None
    in_stock: bool = False
    featured: bool = False
    sort: str = DEFAULT_SORT
    status: Optional[ProductStatus] = ProductStatus.ACTIVE
    admin: bool = False

    @classmethod
    def from_args(cls, args: Mapping[str, Any], is_admin: bool = False):
        """Normalize parsed query arguments; never rejects input"""
        sort = args.get("sort")
        if sort not in SORT_OPTIONS:
            sort = DEFAULT_SORT

        subcategory = args.get("subcategory") or args.get("group_id")
        limit = Paginator.clamp_limit(args.get("limit"))

        if is_admin:
            # admins see every status unless they narrow it explicitly
            status = _parse_status(args.get("status"))
        else:
            status = ProductStatus.ACTIVE

        return cls(
            page=Paginator.clamp_page(args.get("page"), limit),
            limit=limit,
            search=normalize_search(args.get("search")),
            categories=valid_category_ids(args.get("category"), args.get("categories")),
            subcategory=str(subcategory).strip() if subcategory else None,
            price_range=price_window(args.get("min_price"), args.get("max_price")),
            in_stock=args.get("in_stock") == "true",
            featured=args.get("featured") == "true",
            sort=sort,
            status=status,
            admin=is_admin,
        )

    def build_select(self) -> Select:
        """Filtered and ordered select over products, without pagination"""
        query = select(Product)
        conditions = []

        if self.status is not None:
            conditions.append(Product.status == self.status)

        if self.categories:
            matching_categories = select(NavigationCategory.id).where(
                or_(
                    NavigationCategory.id.in_(self.categories),
                    NavigationCategory.slug.in_(self.categories),
                )
            )
            conditions.append(Product.category_id.in_(matching_categories))

        if self.subcategory:
            conditions.append(Product.subcategory_id == self.subcategory)

        if self.featured:
            conditions.append(Product.featured.is_(True))

        if self.in_stock:
            conditions.append(Product.stock_quantity > 0)

        if self.price_range:
            min_price, max_price = self.price_range
            conditions.append(Product.effective_price >= min_price)
            conditions.append(Product.effective_price <= max_price)

        if self.search:
            pattern = f"%{escape_like(self.search)}%"
            conditions.append(
                or_(
                    Product.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                    Product.description.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                )
            )

        if conditions:
            query = query.where(and_(*conditions))

        return query.order_by(*self.ordering())

    def ordering(self):
        sort_map = {
            "name": [Product.name.asc()],
            "price_asc": [Product.effective_price.asc(), Product.name.asc()],
            "price_desc": [Product.effective_price.desc(), Product.name.asc()],
            "created_at": [Product.created_at.desc(), Product.name.asc()],
            "featured": [Product.featured.desc(), Product.name.asc()],
        }
        # id keeps page boundaries stable between requests
        return sort_map.get(self.sort, sort_map[DEFAULT_SORT]) + [Product.id.asc()]
