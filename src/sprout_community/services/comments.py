"""Comment threads attached to posts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from sprout_community.core.actor import Actor
from sprout_community.core.errors import AuthorizationError, NotFoundError, NotVotableError
from sprout_community.models.comment import PostComment
from sprout_community.repositories.comment_repo import CommentRepository
from sprout_community.repositories.post_repo import PostRepository
from sprout_community.services import validation

logger = logging.getLogger(__name__)


class CommentThread:
    """Append-only comments. Only approved posts accept new comments."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.comments = CommentRepository(db)

    def add_comment(self, actor: Actor, post_id: int, content: object) -> PostComment:
        """Append a comment to a post and return it."""
        text = validation.bounded_text(
            "content", content, validation.COMMENT_MIN, validation.COMMENT_MAX
        )
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if not post.is_visible:
            raise NotVotableError("Comments are only accepted on approved posts")

        comment = self.comments.add(post_id=post_id, author_id=actor.id, content=text)
        self.db.commit()
        logger.debug("User %s commented on post %s", actor.id, post_id)
        return comment

    def list_comments(self, post_id: int) -> list[PostComment]:
        """Return a post's comments, oldest first."""
        if self.posts.get_by_id(post_id) is None:
            raise NotFoundError("Post not found")
        return self.comments.list_for_post(post_id)

    def delete_comment(self, actor: Actor, comment_id: int) -> None:
        """Remove a comment; allowed for its author and for admins."""
        comment = self.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if not actor.can_manage(comment.author_id):
            raise AuthorizationError("Only the author or an admin may delete this comment")

        self.comments.delete(comment)
        self.db.commit()
        logger.info("Comment %s deleted by user %s", comment_id, actor.id)
