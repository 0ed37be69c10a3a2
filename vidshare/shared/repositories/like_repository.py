"""
Like Repository

Maps LikeTarget values onto the two target columns of the likes table.

Common Operations:
==================
- find()               → The principal's like on a target, if any
- add()                → Insert a like inside a SAVEPOINT
- delete_for_targets() → Cascade delete when a video/comment goes away
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from vidshare.shared.models.enums import LikeTargetKind
from vidshare.shared.models.like import Like, LikeTarget
from vidshare.shared.repositories.base import BaseRepository


def target_column(kind: LikeTargetKind) -> InstrumentedAttribute:
    """Column holding the target id for the given kind."""
    if kind is LikeTargetKind.VIDEO:
        return Like.video_id
    return Like.comment_id


class LikeRepository(BaseRepository[Like]):
    """
    Repository for Like database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Like, session)

    async def find(self, target: LikeTarget, liked_by_id: UUID) -> Optional[Like]:
        """
        Get the principal's like on a target.

        SQL Generated:
            SELECT * FROM likes WHERE video_id = '...' AND liked_by_id = '...'
        """
        result = await self.session.execute(
            select(Like).where(
                target_column(target.kind) == target.target_id,
                Like.liked_by_id == liked_by_id,
            )
        )
        return result.scalar_one_or_none()

    async def add(self, target: LikeTarget, liked_by_id: UUID) -> Like:
        """
        Insert a like in a nested transaction.

        A unique violation (a concurrent toggle won the race) rolls back only
        the SAVEPOINT and surfaces as IntegrityError to the caller.
        """
        column = target_column(target.kind)
        async with self.session.begin_nested():
            like = Like(liked_by_id=liked_by_id, **{column.key: target.target_id})
            self.session.add(like)
        return like

    async def delete_for_targets(self, kind: LikeTargetKind, target_ids: list[UUID]) -> int:
        """Delete every like on any of the given targets."""
        if not target_ids:
            return 0
        return await self.delete_where(target_column(kind).in_(target_ids))
