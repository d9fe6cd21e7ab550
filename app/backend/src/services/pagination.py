"""Offset pagination shared by list operations."""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class Page(Generic[T]):
    """One page of results plus the total row count."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


async def paginate(
    db_session: AsyncSession,
    query: Select,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Run ``query`` for a single page and count all matching rows.

    ``query`` must already carry its ordering.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db_session.execute(count_query)).scalar_one()

    result = await db_session.execute(query.limit(page_size).offset((page - 1) * page_size))
    return Page(items=list(result.scalars().all()), total=total, page=page, page_size=page_size)
