# src/sprout_community/models/post.py
"""SQLAlchemy models for forum posts and their moderation state."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprout_community.db.session import Base
from sprout_community.db.time import utcnow

if TYPE_CHECKING:
    from .user import User


class PostStatus(enum.StrEnum):
    """Moderation lifecycle states. Any state may move to any other."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PostCategory(enum.StrEnum):
    """Fixed set of forum categories."""

    CONSEILS = "conseils"
    QUESTIONS = "questions"
    PARTAGE = "partage"
    IDENTIFICATION = "identification"
    MALADIES = "maladies"
    AUTRES = "autres"


class ForumPost(Base):
    """Community-submitted content item subject to moderation.

    Votes and comments are read through explicit queries rather than ORM
    collections; votes are upserted with Core statements and a loaded
    collection would not see them.
    """

    __tablename__ = "forum_post"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_forum_post_status",
        ),
        # A rejection reason exists exactly when the post is rejected.
        CheckConstraint(
            "(status = 'rejected') = (rejection_reason IS NOT NULL)",
            name="ck_forum_post_rejection_reason",
        ),
        Index("ix_forum_post_status_created", "status", "created_at"),
        Index("ix_forum_post_category", "category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=PostStatus.PENDING.value,
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)

    author: Mapped[User] = relationship("User", lazy="joined")

    @property
    def is_visible(self) -> bool:
        """Return True if the post may appear in public listings."""
        return self.status == PostStatus.APPROVED
