"""
Comment Service

Adding, listing, editing and removing comments on videos. Editing and
removal are limited to the comment's author; removing a comment also
removes the likes it collected.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import Settings
from vidshare.shared.core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    ValidationError,
)
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models.comment import Comment
from vidshare.shared.models.enums import LikeTargetKind
from vidshare.shared.repositories.comment_repository import CommentRepository
from vidshare.shared.repositories.like_repository import LikeRepository
from vidshare.shared.schemas.common import Page
from vidshare.shared.views.compiler import ViewCompiler


logger = get_logger(__name__)


def _content(value: Optional[str]) -> str:
    content = (value or "").strip()
    if not content:
        raise ValidationError("Comment content is required", details={"field": "content"})
    return content


class CommentService:
    """
    Service for comment business logic.

    Attributes:
        session: Database session
        repo: CommentRepository instance
        views: ViewCompiler for the comment page
    """

    def __init__(self, session: AsyncSession, config: Settings) -> None:
        self.session = session
        self.repo = CommentRepository(session)
        self.likes = LikeRepository(session)
        self.views = ViewCompiler(session, config.DEFAULT_PAGE_SIZE, config.MAX_PAGE_SIZE)

    async def list_comments(
        self,
        video_id: UUID,
        viewer_id: Optional[UUID] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        return await self.views.compile_comment_page(video_id, viewer_id, page, limit)

    async def add_comment(self, video_id: UUID, author_id: UUID, content: str) -> Comment:
        """
        Comment on a video the author can see.

        Raises:
            ValidationError: Blank content
            VideoNotFoundError: Absent, or an unpublished video of someone else
        """
        content = _content(content)
        await self.views.compile_video_view(video_id, author_id)

        comment = await self.repo.create(video_id=video_id, owner_id=author_id, content=content)
        logger.info("Comment added", comment_id=str(comment.id), video_id=str(video_id))
        return comment

    async def get_owned_comment(self, comment_id: UUID, requester_id: UUID) -> Comment:
        """
        Raises:
            CommentNotFoundError: No such comment
            AuthorizationError: Someone else wrote it
        """
        comment = await self.repo.get(comment_id)
        if comment is None:
            raise CommentNotFoundError(str(comment_id))
        if comment.owner_id != requester_id:
            raise AuthorizationError("You can only modify your own comments")
        return comment

    async def update_comment(self, comment_id: UUID, requester_id: UUID, content: str) -> Comment:
        content = _content(content)
        comment = await self.get_owned_comment(comment_id, requester_id)
        comment = await self.repo.update(comment, content=content)
        logger.info("Comment updated", comment_id=str(comment_id))
        return comment

    async def delete_comment(self, comment_id: UUID, requester_id: UUID) -> None:
        comment = await self.get_owned_comment(comment_id, requester_id)
        removed_likes = await self.likes.delete_for_targets(LikeTargetKind.COMMENT, [comment_id])
        await self.repo.delete(comment)
        logger.info("Comment deleted", comment_id=str(comment_id), likes=removed_likes)
