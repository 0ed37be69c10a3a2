"""
User Entity Model

Represents a registered principal. A user's public face is their channel:
the same row, looked up by username.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                    │ 550e8400-e29b-41d4-a716-446655440000                 │
│ username              │ "alice"                                              │
│ email                 │ "alice@example.com"                                  │
│ full_name             │ "Alice Liddell"                                      │
│ password_hash         │ "$2b$12$..."                                         │
│ avatar_url            │ "https://media.example.com/avatar/3f2a....png"       │
│ avatar_public_id      │ "avatar/3f2a....png"                                 │
│ cover_image_url       │ null                                                 │
│ created_at            │ 2024-01-01T00:00:00Z                                 │
└──────────────────────────────────────────────────────────────────────────────┘

Username and email are stored lowercased; lookups lowercase their input.
"""

from typing import Optional
import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.shared.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    User model representing a registered principal and their channel.

    Attributes:
        id: Unique identifier (UUID v4)
        username: Channel handle (unique, lowercase)
        email: Login email (unique, lowercase)
        full_name: Display name
        password_hash: Bcrypt hashed password
        avatar_url / avatar_public_id: Avatar blob
        cover_image_url / cover_image_public_id: Optional cover blob
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    username: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Bcrypt hashed password
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MEDIA
    # ═══════════════════════════════════════════════════════════════════════════

    avatar_url: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_public_id: Mapped[str] = mapped_column(Text, nullable=False)

    cover_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cover_image_public_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username={self.username})>"
