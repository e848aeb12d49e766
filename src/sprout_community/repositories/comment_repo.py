"""Data access helpers for post comment threads."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from sprout_community.models.comment import PostComment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comments."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, comment_id: int) -> PostComment | None:
        """Return a comment by identifier."""
        return self.session.get(PostComment, comment_id)

    def add(self, *, post_id: int, author_id: int, content: str) -> PostComment:
        """Append a comment to a post and return the persisted instance."""
        comment = PostComment(post_id=post_id, author_id=author_id, content=content)
        self.session.add(comment)
        self.session.flush()
        return comment

    def delete(self, comment: PostComment) -> None:
        """Remove a single comment."""
        self.session.delete(comment)
        self.session.flush()

    def list_for_post(self, post_id: int) -> list[PostComment]:
        """Return a post's comments in chronological order with authors loaded."""
        stmt = (
            select(PostComment)
            .where(PostComment.post_id == post_id)
            .order_by(PostComment.created_at.asc(), PostComment.id.asc())
        )
        return list(self.session.scalars(stmt))
