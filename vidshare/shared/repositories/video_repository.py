"""
Video Repository

Writes and plain lookups for videos. Client-facing video reads are compiled
by the view compiler; this repository covers what mutations need.
"""

from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.repositories.base import BaseRepository
from vidshare.shared.models.video import Video


class VideoRepository(BaseRepository[Video]):
    """
    Repository for Video database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Video, session)

    async def increment_views(self, video_id: UUID) -> None:
        """
        Atomically add one view.

        Done in SQL rather than read-modify-write so concurrent viewers
        never lose increments.

        SQL Generated:
            UPDATE videos SET views = views + 1 WHERE id = '...'
        """
        await self.session.execute(
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
        )
