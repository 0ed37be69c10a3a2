"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser, OptionalViewer
- Pagination: get_pagination(), Pagination
- Services: get_*_service() functions, get_blob_store()

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        user: Principal = Depends(get_current_user)
    ):

    # Write this:
    async def handler(db: DbSession, user: CurrentUser):
"""

from vidshare.api.dependencies.database import (
    get_db,
    DbSession,
)
from vidshare.api.dependencies.auth import (
    get_current_user,
    get_optional_user,
    viewer_id,
    CurrentUser,
    OptionalViewer,
)
from vidshare.api.dependencies.pagination import (
    get_pagination,
    Pagination,
)
from vidshare.api.dependencies.services import get_blob_store

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_optional_user",
    "viewer_id",
    "CurrentUser",
    "OptionalViewer",
    # Pagination
    "get_pagination",
    "Pagination",
    # Services
    "get_blob_store",
]
