"""Read-side assembly of posts with their derived aggregates.

Nothing computed here is cached: likes, dislikes, per-user votes and comment
lists are recomputed from the rows on every call because votes and comments
change independently of the post row.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from sprout_community.core.actor import Actor, UserId
from sprout_community.core.errors import NotFoundError
from sprout_community.models.post import ForumPost
from sprout_community.models.vote import VoteValue
from sprout_community.repositories.comment_repo import CommentRepository
from sprout_community.repositories.post_repo import PostRepository
from sprout_community.repositories.vote_repo import VoteRepository
from sprout_community.schemas.comment import CommentOut
from sprout_community.schemas.post import PostDetail, PostSummary
from sprout_community.schemas.user import AuthorOut

logger = logging.getLogger(__name__)

SNAPSHOT_ISOLATION = "REPEATABLE READ"


def _post_fields(post: ForumPost) -> dict[str, Any]:
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "category": post.category,
        "status": post.status,
        "rejection_reason": post.rejection_reason,
        "report_count": post.report_count or 0,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "author": AuthorOut.model_validate(post.author),
    }


class PostQueryService:
    """Builds ``PostDetail`` and ``PostSummary`` views from stored rows."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.votes = VoteRepository(db)
        self.comments = CommentRepository(db)

    def _begin_snapshot(self) -> None:
        """Open a fresh transaction so the following reads share one view.

        PostgreSQL's default READ COMMITTED gives each statement its own
        snapshot, so there the transaction runs as REPEATABLE READ. SQLite
        engines emit BEGIN for every session transaction (see
        ``db.session.make_engine``) and the first read fixes the snapshot.
        """
        if self.db.in_transaction():
            if self.db.new or self.db.dirty or self.db.deleted:
                logger.debug(
                    "Session has pending changes; post detail reads the current transaction"
                )
                return
            self.db.commit()

        if self.db.get_bind().dialect.name == "postgresql":
            self.db.connection(execution_options={"isolation_level": SNAPSHOT_ISOLATION})
        else:
            self.db.connection()

    def get_post_detail(self, post_id: int, actor: Actor | None = None) -> PostDetail:
        """Return a post with vote tallies and its comment thread.

        Args:
            post_id: Identifier of the post.
            actor: Requesting user; when given, ``user_vote`` carries their vote.

        Raises:
            NotFoundError: If the post does not exist.
        """
        self._begin_snapshot()

        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")

        user_votes: dict[UserId, VoteValue] = {
            user_id: VoteValue(value) for user_id, value in self.votes.list_for_post(post_id)
        }
        comments = self.comments.list_for_post(post_id)

        likes = sum(1 for value in user_votes.values() if value is VoteValue.LIKE)
        return PostDetail(
            **_post_fields(post),
            likes=likes,
            dislikes=len(user_votes) - likes,
            comments=[CommentOut.model_validate(comment) for comment in comments],
            user_vote=user_votes.get(actor.id) if actor is not None else None,
            user_votes=user_votes,
        )

    def summarize(self, posts: Sequence[ForumPost]) -> list[PostSummary]:
        """Return listing rows with counts, preserving the order of ``posts``."""
        ids = [post.id for post in posts]
        vote_counts = self.posts.vote_counts(ids)
        comment_counts = self.posts.comment_counts(ids)

        summaries = []
        for post in posts:
            likes, dislikes = vote_counts.get(post.id, (0, 0))
            summaries.append(
                PostSummary(
                    **_post_fields(post),
                    likes=likes,
                    dislikes=dislikes,
                    score=likes - dislikes,
                    comment_count=comment_counts.get(post.id, 0),
                )
            )
        return summaries
