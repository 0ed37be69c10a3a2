"""
Comment Repository
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.repositories.base import BaseRepository
from vidshare.shared.models.comment import Comment


class CommentRepository(BaseRepository[Comment]):
    """
    Repository for Comment database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Comment, session)

    async def ids_for_video(self, video_id: UUID) -> list[UUID]:
        """All comment ids on a video (used to cascade their likes)."""
        result = await self.session.execute(
            select(Comment.id).where(Comment.video_id == video_id)
        )
        return list(result.scalars().all())

    async def delete_for_video(self, video_id: UUID) -> int:
        """Delete every comment on a video."""
        return await self.delete_where(Comment.video_id == video_id)
