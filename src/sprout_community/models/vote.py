# src/sprout_community/models/vote.py
"""Models capturing like/dislike votes on posts."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sprout_community.db.session import Base
from sprout_community.db.time import utcnow


class VoteValue(enum.StrEnum):
    """Allowed vote values."""

    LIKE = "like"
    DISLIKE = "dislike"


class PostVote(Base):
    """Single active vote of a user on a post.

    The composite primary key prevents duplicate votes from the same user;
    a revote updates ``value`` in place.
    """

    __tablename__ = "forum_vote"
    __table_args__ = (
        CheckConstraint("value IN ('like', 'dislike')", name="ck_forum_vote_value"),
        Index("ix_forum_vote_post_id", "post_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("forum_post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        primary_key=True,
    )

    value: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)
