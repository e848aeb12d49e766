"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from sqlalchemy import Select, case, delete, func, or_, select
from sqlalchemy.orm import Session

from sprout_community.models.comment import PostComment
from sprout_community.models.post import ForumPost, PostStatus
from sprout_community.models.vote import PostVote, VoteValue

__all__ = ["PostRepository", "SortKey"]

SortKey = Literal["recent", "popular", "comments"]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> ForumPost | None:
        """Return a post by identifier."""
        return self.session.get(ForumPost, post_id)

    def add(self, post: ForumPost) -> ForumPost:
        """Insert a new post and return the persisted ORM instance."""
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: ForumPost) -> None:
        """Remove a post together with its votes and comments."""
        self.session.execute(delete(PostVote).where(PostVote.post_id == post.id))
        self.session.execute(delete(PostComment).where(PostComment.post_id == post.id))
        self.session.delete(post)
        self.session.flush()

    def list_by_status(
        self,
        status: PostStatus,
        *,
        limit: int,
        offset: int = 0,
    ) -> list[ForumPost]:
        """Return posts in ``status``, oldest first (moderation queue order)."""
        stmt = (
            select(ForumPost)
            .where(ForumPost.status == status.value)
            .order_by(ForumPost.created_at.asc(), ForumPost.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def list_visible(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
        sort: SortKey = "recent",
        limit: int,
        offset: int = 0,
    ) -> list[ForumPost]:
        """Return approved posts filtered and ordered for public listings.

        Args:
            category: Restrict to a single category.
            search: Case-insensitive substring matched against title or content.
            sort: ``recent`` (newest first), ``popular`` (likes minus dislikes)
                or ``comments`` (comment count). Ties fall back to recency.
            limit: Maximum number of rows.
            offset: Number of rows to skip.
        """
        stmt: Select[tuple[ForumPost]] = select(ForumPost).where(
            ForumPost.status == PostStatus.APPROVED.value
        )

        if category:
            stmt = stmt.where(ForumPost.category == category)

        if search:
            pattern = f"%{_escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    ForumPost.title.ilike(pattern, escape="\\"),
                    ForumPost.content.ilike(pattern, escape="\\"),
                )
            )

        if sort == "popular":
            votes = (
                select(
                    PostVote.post_id.label("post_id"),
                    func.sum(
                        case((PostVote.value == VoteValue.LIKE.value, 1), else_=-1)
                    ).label("score"),
                )
                .group_by(PostVote.post_id)
                .subquery()
            )
            stmt = stmt.outerjoin(votes, votes.c.post_id == ForumPost.id).order_by(
                func.coalesce(votes.c.score, 0).desc()
            )
        elif sort == "comments":
            comments = (
                select(
                    PostComment.post_id.label("post_id"),
                    func.count(PostComment.id).label("comment_count"),
                )
                .group_by(PostComment.post_id)
                .subquery()
            )
            stmt = stmt.outerjoin(comments, comments.c.post_id == ForumPost.id).order_by(
                func.coalesce(comments.c.comment_count, 0).desc()
            )

        stmt = stmt.order_by(ForumPost.created_at.desc(), ForumPost.id.desc())
        stmt = stmt.limit(limit).offset(offset)
        return list(self.session.scalars(stmt))

    def vote_counts(self, post_ids: Iterable[int]) -> dict[int, tuple[int, int]]:
        """Return ``{post_id: (likes, dislikes)}`` for the given posts."""
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = (
            select(
                PostVote.post_id,
                func.sum(case((PostVote.value == VoteValue.LIKE.value, 1), else_=0)),
                func.sum(case((PostVote.value == VoteValue.DISLIKE.value, 1), else_=0)),
            )
            .where(PostVote.post_id.in_(ids))
            .group_by(PostVote.post_id)
        )
        return {
            post_id: (int(likes or 0), int(dislikes or 0))
            for post_id, likes, dislikes in self.session.execute(stmt)
        }

    def comment_counts(self, post_ids: Iterable[int]) -> dict[int, int]:
        """Return ``{post_id: number_of_comments}`` for the given posts."""
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = (
            select(PostComment.post_id, func.count(PostComment.id))
            .where(PostComment.post_id.in_(ids))
            .group_by(PostComment.post_id)
        )
        return {post_id: int(count) for post_id, count in self.session.execute(stmt)}

    def increment_reports(self, post: ForumPost, delta: int = 1) -> ForumPost:
        """Increment the report counter for a post."""
        # SQL-side increment so concurrent reports are not lost.
        post.report_count = ForumPost.report_count + delta
        self.session.flush()
        self.session.refresh(post, ["report_count"])
        return post
