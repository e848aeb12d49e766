# src/sprout_community/services/moderation.py
"""Moderation services for the community forum.

Posts move between ``pending``, ``approved`` and ``rejected`` only through the
methods below. No state is terminal: a rejected post may be approved later and
an approved post may be rejected. The rejection reason is kept set exactly
while the post is rejected.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from sprout_community.core.actor import Actor
from sprout_community.core.errors import (
    AuthorizationError,
    NotFoundError,
    NotVotableError,
    ValidationError,
)
from sprout_community.core.settings import settings
from sprout_community.models.post import ForumPost, PostCategory, PostStatus
from sprout_community.repositories.post_repo import PostRepository, SortKey
from sprout_community.services import validation

logger = logging.getLogger(__name__)

SORT_KEYS: tuple[SortKey, ...] = ("recent", "popular", "comments")


def _require_moderator(actor: Actor) -> None:
    if not actor.can_moderate:
        raise AuthorizationError("Moderator or admin privileges required")


class ModerationService:
    """Service handling post submission, moderation and listing."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)

    def get_post(self, post_id: int) -> ForumPost:
        """Return a post or raise ``NotFoundError``."""
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def submit_post(
        self,
        actor: Actor,
        *,
        title: object,
        content: object,
        category: object,
    ) -> ForumPost:
        """Create a post in the ``pending`` state.

        Raises:
            ValidationError: If title, content or category are out of bounds.
        """
        post = ForumPost(
            title=validation.bounded_text(
                "title", title, validation.TITLE_MIN, validation.TITLE_MAX
            ),
            content=validation.bounded_text(
                "content", content, validation.CONTENT_MIN, validation.CONTENT_MAX
            ),
            category=validation.choice("category", category, PostCategory).value,
            author_id=actor.id,
            status=PostStatus.PENDING.value,
            rejection_reason=None,
        )
        self.posts.add(post)
        self.db.commit()
        logger.info("Post %s submitted by user %s", post.id, actor.id)
        return post

    def approve_post(self, actor: Actor, post_id: int) -> ForumPost:
        """Approve a post and clear any rejection reason. Idempotent."""
        _require_moderator(actor)
        post = self.get_post(post_id)

        if post.status == PostStatus.APPROVED and post.rejection_reason is None:
            return post

        previous = post.status
        post.status = PostStatus.APPROVED.value
        post.rejection_reason = None
        self.db.commit()
        logger.info(
            "Post %s moved %s -> approved by user %s", post.id, previous, actor.id
        )
        return post

    def reject_post(self, actor: Actor, post_id: int, reason: object) -> ForumPost:
        """Reject a post, storing (or overwriting) the rejection reason."""
        _require_moderator(actor)
        text = validation.bounded_text(
            "reason", reason, validation.REASON_MIN, validation.REASON_MAX
        )
        post = self.get_post(post_id)

        previous = post.status
        post.status = PostStatus.REJECTED.value
        post.rejection_reason = text
        self.db.commit()
        logger.info(
            "Post %s moved %s -> rejected by user %s", post.id, previous, actor.id
        )
        return post

    def edit_post(
        self,
        actor: Actor,
        post_id: int,
        *,
        title: object | None = None,
        content: object | None = None,
        category: object | None = None,
    ) -> ForumPost:
        """Update a post's text or category.

        Only the author or an admin may edit. Edits by someone without
        moderation rights send the post back to ``pending``.
        """
        if title is None and content is None and category is None:
            raise ValidationError("Nothing to update")

        post = self.get_post(post_id)
        if not actor.can_manage(post.author_id):
            raise AuthorizationError("Only the author or an admin may edit this post")

        if title is not None:
            post.title = validation.bounded_text(
                "title", title, validation.TITLE_MIN, validation.TITLE_MAX
            )
        if content is not None:
            post.content = validation.bounded_text(
                "content", content, validation.CONTENT_MIN, validation.CONTENT_MAX
            )
        if category is not None:
            post.category = validation.choice("category", category, PostCategory).value

        if not actor.can_moderate:
            post.status = PostStatus.PENDING.value
            post.rejection_reason = None

        self.db.commit()
        logger.info("Post %s edited by user %s (status=%s)", post.id, actor.id, post.status)
        return post

    def delete_post(self, actor: Actor, post_id: int) -> None:
        """Delete a post along with its votes and comments."""
        post = self.get_post(post_id)
        if not actor.can_manage(post.author_id):
            raise AuthorizationError("Only the author or an admin may delete this post")

        self.posts.delete(post)
        self.db.commit()
        logger.info("Post %s deleted by user %s", post_id, actor.id)

    def report_post(self, actor: Actor, post_id: int) -> ForumPost:
        """Flag an approved post for moderator attention."""
        post = self.get_post(post_id)
        if not post.is_visible:
            raise NotVotableError("Only approved posts can be reported")

        self.posts.increment_reports(post)
        self.db.commit()
        logger.warning(
            "Post %s reported by user %s (reports=%s)", post.id, actor.id, post.report_count
        )
        return post

    def list_visible_posts(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
        sort: str = "recent",
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ForumPost]:
        """Return approved posts, optionally filtered and sorted."""
        if category is not None:
            category = validation.choice("category", category, PostCategory).value
        if sort not in SORT_KEYS:
            raise ValidationError(f"sort must be one of: {', '.join(SORT_KEYS)}")
        search = search.strip() if search else None

        return self.posts.list_visible(
            category=category,
            search=search or None,
            sort=sort,  # type: ignore[arg-type]
            limit=self._page_size(limit),
            offset=self._offset(offset),
        )

    def list_queue(
        self,
        actor: Actor,
        *,
        status: str = PostStatus.PENDING.value,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ForumPost]:
        """Return posts in a given moderation state, oldest first."""
        _require_moderator(actor)
        wanted = validation.choice("status", status, PostStatus)
        return self.posts.list_by_status(
            wanted,
            limit=self._page_size(limit),
            offset=self._offset(offset),
        )

    @staticmethod
    def _page_size(limit: int | None) -> int:
        if limit is None:
            return settings.posts_page_size
        if limit < 1:
            raise ValidationError("limit must be positive")
        return min(limit, settings.posts_page_size_max)

    @staticmethod
    def _offset(offset: int) -> int:
        if offset < 0:
            raise ValidationError("offset must not be negative")
        return offset
