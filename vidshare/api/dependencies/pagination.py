"""
Pagination dependency.

Out-of-range values are clamped rather than rejected: page < 1 becomes 1,
a missing or non-positive limit becomes the default, and limits above the
maximum are capped.
"""

from typing import Annotated, Optional

from fastapi import Depends, Query

from vidshare.config.settings import Settings, get_settings
from vidshare.shared.views.pagination import PageParams


async def get_pagination(
    config: Annotated[Settings, Depends(get_settings)],
    page: Optional[int] = Query(None, description="1-based page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
) -> PageParams:
    """Pagination parameters dependency."""
    return PageParams.clamp(
        page,
        limit,
        default_limit=config.DEFAULT_PAGE_SIZE,
        max_limit=config.MAX_PAGE_SIZE,
    )


Pagination = Annotated[PageParams, Depends(get_pagination)]
