"""
User Repository

Database operations specific to the User model.
Extends BaseRepository with user-specific query methods.

Common Operations:
==================
- get_by_email()           → Find user by email address
- get_by_login()           → Login by username OR email
- username_or_email_taken()→ Registration uniqueness check

All inputs are lowercased before comparison; stored values are lowercase.
"""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.repositories.base import BaseRepository
from vidshare.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)."""
        result = await self.session.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_login(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[User]:
        """
        Find the user a login attempt refers to.

        Either identifier may be given; when both are, a user matching
        either one is returned.
        """
        clauses = []
        if username:
            clauses.append(User.username == username.strip().lower())
        if email:
            clauses.append(User.email == email.strip().lower())
        if not clauses:
            return None

        result = await self.session.execute(select(User).where(or_(*clauses)).limit(1))
        return result.scalar_one_or_none()

    async def username_or_email_taken(
        self,
        username: str,
        email: str,
    ) -> bool:
        """
        Check whether any account already uses the username or email.

        Args:
            username: Candidate username
            email: Candidate email
        """
        query = select(User.id).where(
            or_(
                User.username == username.strip().lower(),
                User.email == email.strip().lower(),
            )
        )
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None
