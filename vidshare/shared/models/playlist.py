"""
Playlist Models

A playlist is an ordered, owner-curated list of videos.

    Playlist (1) ────< PlaylistVideo >──── (1) Video
                        position: 0, 1, 2, ...

A video appears at most once per playlist. Positions are assigned at the
end on add and compacted on remove so they stay contiguous.
"""

from datetime import datetime
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.shared.models.base import Base, TimestampMixin, utcnow


class Playlist(Base, TimestampMixin):
    """
    Playlist model.

    Attributes:
        id: Unique identifier (UUID v4)
        name: Playlist name
        description: Free text description
        owner_id: FK to the owning user
    """

    __tablename__ = "playlists"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Playlist(id={self.id}, name={self.name!r})>"


class PlaylistVideo(Base):
    """Membership of a video in a playlist, with its position."""

    __tablename__ = "playlist_videos"
    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_videos_pair"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    playlist_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("playlists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    video_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("videos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False)

    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
