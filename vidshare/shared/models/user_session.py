"""
Session Record Model

Server-side record of the one refresh token currently valid for a user.

SAMPLE SESSION RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ token_hash       │ "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822c..."      │
│ generation       │ 3                                                         │
│ issued_at        │ 2024-01-15T10:30:00Z                                      │
│ rotated_at       │ 2024-01-16T08:12:44Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘

Only the SHA-256 digest of the refresh token is stored. At most one row per
user: login replaces it, rotation advances it, logout and reuse detection
delete it.
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.shared.models.base import Base, utcnow


class UserSession(Base):
    """
    Session record.

    Attributes:
        user_id: Owner of the session (primary key, so one per user)
        token_hash: SHA-256 hex digest of the current refresh token
        generation: Rotation counter, 0 at login
        issued_at: Login time
        rotated_at: Last successful rotation, null until the first one
    """

    __tablename__ = "user_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    token_hash: Mapped[str] = mapped_column(String(64), nullable=False)

    generation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    rotated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<UserSession(user_id={self.user_id}, generation={self.generation})>"
