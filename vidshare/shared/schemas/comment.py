"""
Comment Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from vidshare.shared.schemas.common import BaseSchema
from vidshare.shared.schemas.video import OwnerCard


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=10_000)


class CommentUpdate(BaseModel):
    content: str = Field(min_length=1, max_length=10_000)


class CommentResponse(BaseSchema):
    """A comment row as written (returned by add/update)."""

    id: UUID
    content: str
    video_id: UUID
    owner_id: UUID
    created_at: datetime
    updated_at: datetime


class CommentView(BaseSchema):
    """A comment in a page, with its author card and the viewer's like flag."""

    id: UUID
    content: str
    video_id: UUID
    created_at: datetime
    updated_at: datetime
    owner: OwnerCard
    likes_count: int
    is_liked: bool
