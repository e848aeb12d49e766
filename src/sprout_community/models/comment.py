# src/sprout_community/models/comment.py
"""Models for comment threads attached to posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprout_community.db.session import Base
from sprout_community.db.time import utcnow

if TYPE_CHECKING:
    from .user import User


class PostComment(Base):
    """Append-only comment on a post. Content is never edited."""

    __tablename__ = "forum_comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("forum_post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    author: Mapped[User] = relationship("User", lazy="joined")
