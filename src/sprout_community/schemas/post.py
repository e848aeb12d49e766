# src/sprout_community/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sprout_community.models.post import PostStatus
from sprout_community.models.vote import VoteValue

from .comment import CommentOut
from .user import AuthorOut


class PostCreate(BaseModel):
    """Schema for submitting a new post; bounds are enforced by the service."""

    title: str = Field(..., description="Post title (5-100 characters)")
    content: str = Field(..., description="Post body (20-5000 characters)")
    category: str = Field(..., description="One of the forum categories")


class PostUpdate(BaseModel):
    """Partial update of a post by its author or an admin."""

    title: str | None = None
    content: str | None = None
    category: str | None = None


class PostRejection(BaseModel):
    """Moderator's reason for rejecting a post."""

    reason: str = Field(..., description="Rejection reason (10-500 characters)")


class _PostBase(BaseModel):
    id: int
    title: str
    content: str
    category: str
    status: PostStatus
    rejection_reason: str | None = None
    report_count: int = 0
    created_at: datetime
    updated_at: datetime
    author: AuthorOut
    likes: int = 0
    dislikes: int = 0

    model_config = ConfigDict(from_attributes=True)


class PostSummary(_PostBase):
    """Listing row with vote and comment counts."""

    score: int = 0
    comment_count: int = 0


class PostDetail(_PostBase):
    """Post with its full aggregate view, computed per read."""

    comments: list[CommentOut] = Field(default_factory=list)
    user_vote: VoteValue | None = None
    user_votes: dict[int, VoteValue] = Field(default_factory=dict)
