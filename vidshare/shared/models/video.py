"""
Video Entity Model

A media item owned by exactly one user.

SAMPLE VIDEO RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 7c9e6679-7425-40de-944b-e07fc1f90ae7                   │
│ title               │ "Sourdough in 10 minutes"                              │
│ description         │ "Quick starter walkthrough"                            │
│ video_url           │ "https://media.example.com/video/91b0....mp4"          │
│ thumbnail_url       │ "https://media.example.com/thumbnail/aa31....jpg"      │
│ duration            │ 604.2                                                  │
│ views               │ 128                                                    │
│ is_published        │ true                                                   │
│ owner_id            │ 550e8400-e29b-41d4-a716-446655440000                   │
└──────────────────────────────────────────────────────────────────────────────┘

Videos are created unpublished. Only published videos appear in public
listings; the owner can still fetch an unpublished one directly.
"""

import uuid

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.shared.models.base import Base, TimestampMixin


class Video(Base, TimestampMixin):
    """
    Video model.

    Attributes:
        id: Unique identifier (UUID v4)
        title: Video title
        description: Free text description
        video_url / video_public_id: Media blob
        thumbnail_url / thumbnail_public_id: Thumbnail blob
        duration: Length in seconds
        views: View counter, incremented by explicit view recording
        is_published: Visibility in public listings
        owner_id: FK to the owning user
    """

    __tablename__ = "videos"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    video_public_id: Mapped[str] = mapped_column(Text, nullable=False)

    thumbnail_url: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_public_id: Mapped[str] = mapped_column(Text, nullable=False)

    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════════════════════

    views: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    is_published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
        index=True,
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Video(id={self.id}, title={self.title!r}, published={self.is_published})>"
