"""Vote ledger: one active like/dislike per user per post."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from sprout_community.core.actor import Actor
from sprout_community.core.errors import NotFoundError, NotVotableError
from sprout_community.models.post import ForumPost
from sprout_community.models.vote import VoteValue
from sprout_community.repositories.post_repo import PostRepository
from sprout_community.repositories.vote_repo import VoteRepository
from sprout_community.services import validation

logger = logging.getLogger(__name__)


class VoteLedger:
    """Records votes with last-write-wins semantics.

    A second vote from the same user replaces the first; no history is kept.
    Callers re-read the post through the aggregation service to see updated
    counts.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.votes = VoteRepository(db)

    def _votable_post(self, post_id: int) -> ForumPost:
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if not post.is_visible:
            raise NotVotableError("Votes are only accepted on approved posts")
        return post

    def cast_vote(self, actor: Actor, post_id: int, value: object) -> None:
        """Insert or overwrite the actor's vote on a post.

        Raises:
            ValidationError: If ``value`` is not ``like`` or ``dislike``.
            NotFoundError: If the post does not exist.
            NotVotableError: If the post is not approved.
        """
        vote = validation.choice("value", value, VoteValue)
        self._votable_post(post_id)
        self.votes.upsert(post_id=post_id, user_id=actor.id, value=vote.value)
        self.db.commit()
        logger.debug("User %s voted %s on post %s", actor.id, vote.value, post_id)

    def get_user_vote(self, actor: Actor, post_id: int) -> VoteValue | None:
        """Return the actor's current vote on a post, if any."""
        if self.posts.get_by_id(post_id) is None:
            raise NotFoundError("Post not found")
        value = self.votes.get_value(post_id=post_id, user_id=actor.id)
        return VoteValue(value) if value is not None else None
