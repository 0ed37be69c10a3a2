"""
Engagement Service

Two-state toggles over graph edges: likes (on videos and comments) and
channel subscriptions.

Toggle Protocol:
================
    existing = lookup(target, actor)
    existing?  → delete it            → {active: false}
    absent?    → insert in SAVEPOINT  → {active: true}
                   unique violation   → ConflictError (a concurrent toggle won)

Toggling twice returns the edge set to where it started.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import Settings
from vidshare.shared.core.exceptions import (
    CommentNotFoundError,
    ConflictError,
    UserNotFoundError,
    ValidationError,
)
from vidshare.shared.core.logging import get_logger
from vidshare.shared.models.enums import LikeTargetKind
from vidshare.shared.models.like import LikeTarget
from vidshare.shared.repositories.comment_repository import CommentRepository
from vidshare.shared.repositories.like_repository import LikeRepository
from vidshare.shared.repositories.subscription_repository import SubscriptionRepository
from vidshare.shared.repositories.user_repository import UserRepository
from vidshare.shared.schemas.common import Page
from vidshare.shared.views.compiler import ViewCompiler


logger = get_logger(__name__)


class EngagementService:
    """
    Service for likes and subscriptions.

    Attributes:
        session: Database session
        config: Settings (self-subscription policy, page sizes)
    """

    def __init__(self, session: AsyncSession, config: Settings) -> None:
        self.session = session
        self.config = config
        self.likes = LikeRepository(session)
        self.subscriptions = SubscriptionRepository(session)
        self.comments = CommentRepository(session)
        self.users = UserRepository(session)
        self.views = ViewCompiler(session, config.DEFAULT_PAGE_SIZE, config.MAX_PAGE_SIZE)

    # ═══════════════════════════════════════════════════════════════════════════
    # LIKES
    # ═══════════════════════════════════════════════════════════════════════════

    async def _ensure_target(self, target: LikeTarget, actor_id: UUID) -> None:
        """The target must exist and sit on a video the actor can see."""
        if target.kind is LikeTargetKind.VIDEO:
            await self.views.compile_video_view(target.target_id, actor_id)
            return

        comment = await self.comments.get(target.target_id)
        if comment is None:
            raise CommentNotFoundError(str(target.target_id))
        await self.views.compile_video_view(comment.video_id, actor_id)

    async def toggle_like(self, target: LikeTarget, actor_id: UUID) -> bool:
        """
        Like or unlike a video or comment.

        Returns:
            True if the actor now likes the target

        Raises:
            VideoNotFoundError / CommentNotFoundError: Target absent
            ConflictError: A concurrent toggle inserted the same like
        """
        await self._ensure_target(target, actor_id)

        existing = await self.likes.find(target, actor_id)
        if existing is not None:
            await self.likes.delete(existing)
            logger.info("Like removed", target=target.kind.value, target_id=str(target.target_id))
            return False

        try:
            await self.likes.add(target, actor_id)
        except IntegrityError:
            raise ConflictError(
                "Like was changed by a concurrent request",
                details={"target": target.kind.value, "target_id": str(target.target_id)},
            )

        logger.info("Like added", target=target.kind.value, target_id=str(target.target_id))
        return True

    # ═══════════════════════════════════════════════════════════════════════════
    # SUBSCRIPTIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _ensure_user(self, user_id: UUID) -> None:
        if not await self.users.exists(user_id):
            raise UserNotFoundError(str(user_id))

    async def toggle_subscription(self, channel_id: UUID, actor_id: UUID) -> bool:
        """
        Subscribe to or unsubscribe from a channel.

        Returns:
            True if the actor is now subscribed

        Raises:
            ValidationError: Self-subscription while the policy forbids it
            UserNotFoundError: No such channel
            ConflictError: A concurrent toggle inserted the same subscription
        """
        if channel_id == actor_id and not self.config.ALLOW_SELF_SUBSCRIPTION:
            raise ValidationError("You cannot subscribe to your own channel")
        await self._ensure_user(channel_id)

        existing = await self.subscriptions.find(actor_id, channel_id)
        if existing is not None:
            await self.subscriptions.delete(existing)
            logger.info("Unsubscribed", channel_id=str(channel_id), subscriber_id=str(actor_id))
            return False

        try:
            await self.subscriptions.add(actor_id, channel_id)
        except IntegrityError:
            raise ConflictError(
                "Subscription was changed by a concurrent request",
                details={"channel_id": str(channel_id)},
            )

        logger.info("Subscribed", channel_id=str(channel_id), subscriber_id=str(actor_id))
        return True

    async def list_subscribers(
        self,
        channel_id: UUID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        await self._ensure_user(channel_id)
        return await self.views.fetch_page(self.views.compile_subscriber_list(channel_id), page, limit)

    async def list_subscriptions(
        self,
        subscriber_id: UUID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[dict[str, Any]]:
        await self._ensure_user(subscriber_id)
        return await self.views.fetch_page(
            self.views.compile_subscription_list(subscriber_id), page, limit
        )
