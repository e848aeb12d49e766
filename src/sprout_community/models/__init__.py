# src/sprout_community/models/__init__.py
"""SQLAlchemy models for the Sprout Community application."""

from .comment import PostComment
from .post import ForumPost, PostCategory, PostStatus
from .user import User
from .vote import PostVote, VoteValue

__all__ = [
    "ForumPost", "PostCategory", "PostStatus",
    "PostComment",
    "PostVote", "VoteValue",
    "User",
]
