"""
Subscription Repository
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.shared.models.subscription import Subscription
from vidshare.shared.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """
    Repository for Subscription database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Subscription, session)

    async def find(self, subscriber_id: UUID, channel_id: UUID) -> Optional[Subscription]:
        """Get the subscriber → channel edge, if any."""
        result = await self.session.execute(
            select(Subscription).where(
                Subscription.subscriber_id == subscriber_id,
                Subscription.channel_id == channel_id,
            )
        )
        return result.scalar_one_or_none()

    async def add(self, subscriber_id: UUID, channel_id: UUID) -> Subscription:
        """
        Insert an edge inside a SAVEPOINT.

        A concurrent duplicate raises IntegrityError after rolling back only
        the nested transaction.
        """
        async with self.session.begin_nested():
            subscription = Subscription(subscriber_id=subscriber_id, channel_id=channel_id)
            self.session.add(subscription)
        return subscription
