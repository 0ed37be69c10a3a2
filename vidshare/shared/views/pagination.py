"""
Pagination Engine

Slices a compiled view into a page and reports where the page sits.

Parameter Clamping:
===================
Bad paging parameters are corrected, never rejected:

    page   < 1 or missing  → 1
    limit  < 1 or missing  → DEFAULT_PAGE_SIZE (10)
    limit  > MAX_PAGE_SIZE → MAX_PAGE_SIZE (100)

Counting:
=========
total_items is an exact COUNT(*) over the full view with its ORDER BY
dropped, taken before slicing:

    SELECT count(*) FROM (<view without ORDER BY>) AS anon_1

    total_pages = max(1, ceil(total_items / limit))
    skip        = (page - 1) * limit

A page past the end comes back empty with has_next_page = false. Because
every compiled view ends its ORDER BY with an id tiebreak, walking pages
1..total_pages yields each item exactly once.
"""

from dataclasses import dataclass
import math
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.schemas.common import Page
from vidshare.shared.views.pipeline import ViewPipeline


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageParams:
    """Clamped page/limit pair."""

    page: int
    limit: int

    @classmethod
    def clamp(
        cls,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
    ) -> "PageParams":
        page = page if page is not None and page >= 1 else 1
        if limit is None or limit < 1:
            limit = default_limit
        return cls(page=page, limit=min(limit, max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_page(items: list[Any], params: PageParams, total_items: int) -> Page[Any]:
    """Assemble page metadata around an already-fetched slice."""
    total_pages = max(1, math.ceil(total_items / params.limit))
    has_next = params.page < total_pages
    has_prev = params.page > 1
    return Page[Any](
        items=items,
        page=params.page,
        limit=params.limit,
        total_items=total_items,
        total_pages=total_pages,
        has_next_page=has_next,
        has_prev_page=has_prev,
        next_page=params.page + 1 if has_next else None,
        prev_page=params.page - 1 if has_prev else None,
    )


async def paginate(
    session: AsyncSession,
    pipeline: ViewPipeline,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    *,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> Page[dict[str, Any]]:
    """
    Run a compiled view and return one page of nested documents.

    Args:
        session: Database session
        pipeline: Compiled, unpaged view
        page: Requested page (1-indexed)
        limit: Requested page size
        default_limit: Size used when limit is missing or below 1
        max_limit: Upper bound on limit

    Returns:
        Page of materialized documents
    """
    params = PageParams.clamp(page, limit, default_limit, max_limit)
    statement = pipeline.to_statement()

    count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
    total_items = (await session.execute(count_statement)).scalar_one()

    rows = await session.execute(statement.offset(params.offset).limit(params.limit))
    items = [ViewPipeline.materialize(row) for row in rows.mappings()]

    return build_page(items, params, total_items)
