from typing import Any, Dict, List, Optional
from math import ceil

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from external.database import db


class Paginator:
    DEFAULT_LIMIT: int = 12
    MAX_LIMIT: int = 50  # Safety limit
    # largest OFFSET every supported driver binds as an integer
    MAX_OFFSET: int = 2**31 - 1

    def __init__(
        self,
        query: Select,
        page: Optional[int] = 1,
        limit: Optional[int] = None,
        max_limit: Optional[int] = None,
    ) -> None:
        """
        Initialize paginator with a SQLAlchemy select

        Args:
            query: SQLAlchemy select statement (filters and ordering applied)
            page: Requested page number, clamped to [1, last addressable page]
            limit: Requested page size, clamped to [1, max_limit]
            max_limit: Upper bound for the page size (default: 50)
        """
        self.query: Select = query
        self.max_limit: int = max_limit or self.MAX_LIMIT
        self.limit: int = self.clamp_limit(limit, self.max_limit)
        self.page: int = self.clamp_page(page, self.limit)

    @classmethod
    def clamp_page(cls, page: Optional[int], limit: Optional[int] = None) -> int:
        if page is None or page < 1:
            return 1
        # pages past the offset ceiling are simply empty
        return min(page, cls.MAX_OFFSET // (limit or cls.DEFAULT_LIMIT) + 1)

    @classmethod
    def clamp_limit(cls, limit: Optional[int], max_limit: Optional[int] = None) -> int:
        max_limit = max_limit or cls.MAX_LIMIT
        if limit is None:
            return min(cls.DEFAULT_LIMIT, max_limit)
        return max(1, min(limit, max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def count(self) -> int:
        """Rows matching the query before pagination"""
        count_query = select(func.count()).select_from(
            self.query.order_by(None).subquery()
        )
        return db.session.execute(count_query).scalar_one()

    def paginate(self) -> Dict[str, Any]:
        """
        Execute the paginated query

        Returns:
            Dictionary containing:
            - items: List of rows on the requested page
            - page: Current page number
            - limit: Items per page
            - total: Total number of matching rows
            - total_pages: Total number of pages
        """
        items: List[Any] = (
            db.session.execute(self.query.limit(self.limit).offset(self.offset))
            .unique()
            .scalars()
            .all()
        )
        total: int = self.count()

        return {
            "items": items,
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "total_pages": ceil(total / self.limit) if total else 0,
        }
