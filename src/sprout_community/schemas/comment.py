# src/sprout_community/schemas/comment.py
"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import AuthorOut


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    content: str = Field(..., description="Comment text (1-1000 characters)")


class CommentOut(BaseModel):
    """Comment as returned by the API."""

    id: int
    post_id: int
    content: str
    created_at: datetime
    author: AuthorOut

    model_config = ConfigDict(from_attributes=True)
