# src/sprout_community/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentOut
from .post import PostCreate, PostDetail, PostRejection, PostSummary, PostUpdate
from .user import AuthorOut, UserOut
from .vote import VoteCreate, VoteOut

__all__ = [
    "CommentCreate", "CommentOut",
    "PostCreate", "PostDetail", "PostRejection", "PostSummary", "PostUpdate",
    "AuthorOut", "UserOut",
    "VoteCreate", "VoteOut",
]
