"""Unit tests for the ORM models defined in sprout_community.models.

These tests verify basic mapping correctness: table names, the composite
vote key and the constraints that back the moderation invariants.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import attributes

from sprout_community.models import ForumPost, PostComment, PostStatus, PostVote, User


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert User.__tablename__ == "user_account"
    assert ForumPost.__tablename__ == "forum_post"
    assert PostVote.__tablename__ == "forum_vote"
    assert PostComment.__tablename__ == "forum_comment"


def test_votes_composite_primary_key():
    """Votes table should use a composite primary key (post_id, user_id)."""
    pk_names = {c.name for c in PostVote.__table__.primary_key}
    assert pk_names == {"post_id", "user_id"}


def test_author_relationships_are_instrumented_attributes():
    for attr in (ForumPost.author, PostComment.author):
        assert isinstance(attr, attributes.InstrumentedAttribute)


def test_new_post_defaults(db_session, test_user):
    post = ForumPost(
        title="Basil keeps wilting",
        content="Even with daily watering my basil wilts by noon.",
        category="questions",
        author_id=test_user.id,
    )
    db_session.add(post)
    db_session.flush()

    assert post.status == PostStatus.PENDING
    assert post.rejection_reason is None
    assert post.report_count == 0
    assert post.is_visible is False


def test_rejected_post_requires_reason(db_session, test_user):
    post = ForumPost(
        title="Basil keeps wilting",
        content="Even with daily watering my basil wilts by noon.",
        category="questions",
        author_id=test_user.id,
        status=PostStatus.REJECTED.value,
        rejection_reason=None,
    )
    db_session.add(post)
    with pytest.raises(IntegrityError):
        db_session.flush()


def test_reason_only_allowed_when_rejected(db_session, test_user):
    post = ForumPost(
        title="Basil keeps wilting",
        content="Even with daily watering my basil wilts by noon.",
        category="questions",
        author_id=test_user.id,
        status=PostStatus.APPROVED.value,
        rejection_reason="Not about plants at all",
    )
    db_session.add(post)
    with pytest.raises(IntegrityError):
        db_session.flush()


def test_duplicate_vote_rejected_by_key(db_session, test_post, other_user):
    db_session.add(PostVote(post_id=test_post.id, user_id=other_user.id, value="like"))
    db_session.flush()
    db_session.expunge_all()

    db_session.add(PostVote(post_id=test_post.id, user_id=other_user.id, value="dislike"))
    with pytest.raises(IntegrityError):
        db_session.flush()
