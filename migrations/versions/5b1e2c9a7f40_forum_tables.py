"""forum tables

Revision ID: 5b1e2c9a7f40
Revises:
Create Date: 2026-10-17 09:12:44.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e2c9a7f40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, posts, votes and comments."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("is_moderator", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "forum_post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("report_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_forum_post_status",
        ),
        sa.CheckConstraint(
            "(status = 'rejected') = (rejection_reason IS NOT NULL)",
            name="ck_forum_post_rejection_reason",
        ),
        sa.ForeignKeyConstraint(["author_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forum_post_author_id", "forum_post", ["author_id"])
    op.create_index("ix_forum_post_status_created", "forum_post", ["status", "created_at"])
    op.create_index("ix_forum_post_category", "forum_post", ["category"])

    op.create_table(
        "forum_vote",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("value", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("value IN ('like', 'dislike')", name="ck_forum_vote_value"),
        sa.ForeignKeyConstraint(["post_id"], ["forum_post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("post_id", "user_id"),
    )
    op.create_index("ix_forum_vote_post_id", "forum_vote", ["post_id"])

    op.create_table(
        "forum_comment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["forum_post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forum_comment_post_id", "forum_comment", ["post_id"])
    op.create_index("ix_forum_comment_author_id", "forum_comment", ["author_id"])


def downgrade() -> None:
    """Drop the forum schema."""
    op.drop_index("ix_forum_comment_author_id", table_name="forum_comment")
    op.drop_index("ix_forum_comment_post_id", table_name="forum_comment")
    op.drop_table("forum_comment")
    op.drop_index("ix_forum_vote_post_id", table_name="forum_vote")
    op.drop_table("forum_vote")
    op.drop_index("ix_forum_post_category", table_name="forum_post")
    op.drop_index("ix_forum_post_status_created", table_name="forum_post")
    op.drop_index("ix_forum_post_author_id", table_name="forum_post")
    op.drop_table("forum_post")
    op.drop_table("user_account")
