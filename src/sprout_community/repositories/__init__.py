"""Repositories wrapping SQLAlchemy access for forum entities."""

from .comment_repo import CommentRepository
from .post_repo import PostRepository, SortKey
from .vote_repo import VoteRepository

__all__ = ["CommentRepository", "PostRepository", "SortKey", "VoteRepository"]
