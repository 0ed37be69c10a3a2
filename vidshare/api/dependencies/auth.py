"""
Authentication Dependencies

FastAPI dependencies for user authentication.

Dependency Hierarchy:
=====================
    get_bearer_token()   ← Extract the Bearer token from the header (may be None)
           │
           ├──► get_current_user()   ← Token required, verified → Principal
           │
           └──► get_optional_user()  ← No token → anonymous viewer (None)
                                       Invalid token → 401, never anonymous

Access tokens are verified by signature and expiry only; no database lookup.

Type Aliases:
=============
    CurrentUser     - Authenticated Principal
    OptionalViewer  - Principal or None for viewer-relative reads

Usage:
======
    from vidshare.api.dependencies.auth import CurrentUser, OptionalViewer

    @router.get("/current-user")
    async def current_user(user: CurrentUser):
        return user.id
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.dependencies.database import get_db
from vidshare.config.settings import Settings, get_settings
from vidshare.shared.core.exceptions import AuthenticationError
from vidshare.shared.services.session_authority import Principal, SessionAuthority


# Security scheme for Bearer tokens; missing headers are handled below
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[str]:
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


def _verify(token: str, db: AsyncSession, config: Settings) -> Principal:
    return SessionAuthority(db, config).verify_access_token(token)


async def get_current_user(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    config: Annotated[Settings, Depends(get_settings)],
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """
    Get current authenticated user from the access token.

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    if token is None:
        raise AuthenticationError("Authorization header required")
    return _verify(token, db, config)


async def get_optional_user(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    config: Annotated[Settings, Depends(get_settings)],
    db: AsyncSession = Depends(get_db),
) -> Optional[Principal]:
    """Principal for a valid token, None when no token is sent."""
    if token is None:
        return None
    return _verify(token, db, config)


def viewer_id(viewer: Optional[Principal]) -> Optional[UUID]:
    return viewer.id if viewer is not None else None


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

# Authenticated user (most common dependency)
CurrentUser = Annotated[Principal, Depends(get_current_user)]

# Anonymous-or-authenticated viewer for viewer-relative reads
OptionalViewer = Annotated[Optional[Principal], Depends(get_optional_user)]
