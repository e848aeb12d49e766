"""Data access helpers for the per-user vote ledger."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from sprout_community.db.time import utcnow
from sprout_community.models.vote import PostVote

__all__ = ["VoteRepository"]

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class VoteRepository:
    """Upsert and read access for ``PostVote`` rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def upsert(self, *, post_id: int, user_id: int, value: str) -> None:
        """Insert the vote or overwrite the value of the existing row.

        Uses ``INSERT ... ON CONFLICT DO UPDATE`` on the (post_id, user_id)
        key; the last write wins. PostgreSQL and SQLite are the supported stores.
        """
        now = utcnow()
        insert_fn = _UPSERT_DIALECTS[self.session.get_bind().dialect.name]
        stmt = insert_fn(PostVote).values(
            post_id=post_id,
            user_id=user_id,
            value=value,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["post_id", "user_id"],
            set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
        )
        self.session.execute(stmt)

    def get_value(self, *, post_id: int, user_id: int) -> str | None:
        """Return the user's current vote value on a post, if any."""
        return self.session.scalar(
            select(PostVote.value).where(
                PostVote.post_id == post_id,
                PostVote.user_id == user_id,
            )
        )

    def list_for_post(self, post_id: int) -> list[tuple[int, str]]:
        """Return ``(user_id, value)`` pairs for every vote on a post."""
        rows = self.session.execute(
            select(PostVote.user_id, PostVote.value)
            .where(PostVote.post_id == post_id)
            .order_by(PostVote.user_id)
        )
        return [(user_id, value) for user_id, value in rows]
