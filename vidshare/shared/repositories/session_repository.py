"""
Session Repository

Storage for refresh-token session records.

Rotation Protocol:
==================
    rotate(user_id, expected_hash, expected_generation, new_hash)

    UPDATE user_sessions
       SET token_hash = :new_hash, generation = generation + 1, rotated_at = now()
     WHERE user_id = :user_id
       AND token_hash = :expected_hash
       AND generation = :expected_generation

The WHERE clause makes rotation a compare-and-swap: of two concurrent
rotations presenting the same token, exactly one updates a row. The loser
sees rowcount 0 and is treated as a replay.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.models.base import utcnow
from vidshare.shared.models.user_session import UserSession


class SessionRepository:
    """
    Repository for UserSession records.

    Keyed by user_id rather than a surrogate id, so it does not build on
    BaseRepository.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UUID) -> Optional[UserSession]:
        # Rotation writes with a bulk UPDATE; always reload the row
        result = await self.session.execute(
            select(UserSession)
            .where(UserSession.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def replace(self, user_id: UUID, token_hash: str) -> None:
        """
        Install a fresh generation-0 record, discarding any previous one.

        Called at login: every token issued before this point stops working.
        Of two concurrent first logins, the one whose insert loses overwrites
        the winner's record, exactly as two sequential logins would.
        """
        record = await self.get(user_id)
        if record is None:
            try:
                async with self.session.begin_nested():
                    self.session.add(
                        UserSession(
                            user_id=user_id,
                            token_hash=token_hash,
                            generation=0,
                            issued_at=utcnow(),
                        )
                    )
                return
            except IntegrityError:
                record = await self.get(user_id)

        record.token_hash = token_hash
        record.generation = 0
        record.issued_at = utcnow()
        record.rotated_at = None
        await self.session.flush()

    async def rotate(
        self,
        user_id: UUID,
        expected_hash: str,
        expected_generation: int,
        new_hash: str,
    ) -> bool:
        """
        Compare-and-swap the current token for a new one.

        Returns:
            True if this call won the rotation, False otherwise
        """
        result = await self.session.execute(
            update(UserSession)
            .where(
                UserSession.user_id == user_id,
                UserSession.token_hash == expected_hash,
                UserSession.generation == expected_generation,
            )
            .values(
                token_hash=new_hash,
                generation=UserSession.generation + 1,
                rotated_at=utcnow(),
            )
        )
        return result.rowcount == 1

    async def delete(self, user_id: UUID) -> bool:
        """
        Remove the user's session record.

        Returns:
            True if a record existed
        """
        result = await self.session.execute(
            delete(UserSession).where(UserSession.user_id == user_id)
        )
        return (result.rowcount or 0) > 0
