"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in VidShare.
It includes the declarative base and the timestamp mixins shared by every table.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       ├── CreatedAtMixin   ← created_at only (edge rows are never updated)
       │
       └── TimestampMixin   ← created_at/updated_at

Usage:
======
    from vidshare.shared.models.base import Base, TimestampMixin

    class Video(Base, TimestampMixin):
        __tablename__ = "videos"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

Identity Policy:
================
Rows reference each other by identifier only. Models declare foreign keys
but no ORM relationships: every join a read needs is spelled out by the view
compiler, and nothing lazily walks User ⇄ Video back-references.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class either
    directly or through one of the mixin classes.
    """


class CreatedAtMixin:
    """
    Mixin for rows that are inserted and deleted but never updated.

    Used by toggle edges (likes, subscriptions) and watch history entries.
    """

    # Set on the Python side so rows created in one transaction keep their
    # insertion order at sub-second resolution; the server default covers raw SQL
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
        index=True,
    )


class TimestampMixin(CreatedAtMixin):
    """
    Mixin that adds automatic timestamp tracking to models.

    Provides two timestamp columns that are automatically managed:
    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Example values:
        created_at: 2024-01-15T10:30:00Z (when record was created)
        updated_at: 2024-01-16T14:45:30Z (last modification time)
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
