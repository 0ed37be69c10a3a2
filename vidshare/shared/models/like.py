"""
Like Edge Model

A like points at exactly one target: a video or a comment.

Storage:
========
Two nullable foreign keys plus a CHECK that exactly one is set. Each target
column carries its own (target, liked_by) uniqueness, so a principal holds
at most one like per target and concurrent toggles collide in the database
instead of producing duplicates.

    ┌────────────┬──────────────┬──────────────┬──────────────┐
    │ id         │ video_id     │ comment_id   │ liked_by_id  │
    ├────────────┼──────────────┼──────────────┼──────────────┤
    │ 1f0e...    │ 7c9e...      │ NULL         │ 550e...      │  ← video like
    │ 2a41...    │ NULL         │ c0ff...      │ 550e...      │  ← comment like
    └────────────┴──────────────┴──────────────┴──────────────┘

Service code never deals with the two columns directly: it speaks in
LikeTarget values and lets the repository pick the column.
"""

from dataclasses import dataclass
from typing import Optional
import uuid

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.shared.models.base import Base, CreatedAtMixin
from vidshare.shared.models.enums import LikeTargetKind


@dataclass(frozen=True)
class LikeTarget:
    """Tagged reference to the thing being liked."""

    kind: LikeTargetKind
    target_id: uuid.UUID

    @classmethod
    def video(cls, video_id: uuid.UUID) -> "LikeTarget":
        return cls(LikeTargetKind.VIDEO, video_id)

    @classmethod
    def comment(cls, comment_id: uuid.UUID) -> "LikeTarget":
        return cls(LikeTargetKind.COMMENT, comment_id)


class Like(Base, CreatedAtMixin):
    """
    Like edge between a principal and a video or comment.

    Attributes:
        id: Unique identifier (UUID v4)
        video_id: Liked video (set iff this is a video like)
        comment_id: Liked comment (set iff this is a comment like)
        liked_by_id: Principal who liked
    """

    __tablename__ = "likes"
    __table_args__ = (
        CheckConstraint(
            "(video_id IS NULL) <> (comment_id IS NULL)",
            name="ck_likes_exactly_one_target",
        ),
        UniqueConstraint("video_id", "liked_by_id", name="uq_likes_video_liked_by"),
        UniqueConstraint("comment_id", "liked_by_id", name="uq_likes_comment_liked_by"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    video_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("videos.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    comment_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    liked_by_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    @property
    def target(self) -> LikeTarget:
        if self.video_id is not None:
            return LikeTarget.video(self.video_id)
        return LikeTarget.comment(self.comment_id)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Like(id={self.id}, target={self.target}, liked_by={self.liked_by_id})>"
