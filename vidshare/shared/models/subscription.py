"""
Subscription Edge Model

Directed edge: subscriber follows channel. At most one edge per pair.
"""

import uuid

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.shared.models.base import Base, CreatedAtMixin


class Subscription(Base, CreatedAtMixin):
    """
    Subscription model.

    Attributes:
        id: Unique identifier (UUID v4)
        subscriber_id: The following user
        channel_id: The followed user
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    subscriber_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    channel_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Subscription(subscriber={self.subscriber_id}, channel={self.channel_id})>"
