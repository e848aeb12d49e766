# src/sprout_community/scripts/tokens.py
"""
Issue bearer tokens for existing accounts.

Sign-in is handled upstream, so this script is how operators obtain a token
for local testing or for a moderator account:

    python -m sprout_community.scripts.tokens alice --role moderator
"""

import argparse

from sqlalchemy import select
from sqlalchemy.orm import Session

from sprout_community.core.security import create_access_token
from sprout_community.db.session import SessionLocal
from sprout_community.models import User

ROLES = ("member", "moderator", "admin")


def get_or_create_user(db: Session, username: str, role: str = "member") -> User:
    """Return the account named ``username``, creating it when missing.

    Args:
        db: Database session
        username: Account name
        role: Grants applied to the account; existing grants are never revoked
    """
    user = db.scalar(select(User).where(User.username == username))
    if user is None:
        user = User(username=username)
        db.add(user)
    if role == "moderator":
        user.is_moderator = True
    elif role == "admin":
        user.is_admin = True
    db.commit()
    db.refresh(user)
    return user


def issue_token(db: Session, username: str, role: str = "member") -> str:
    """Return a fresh bearer token for ``username``."""
    user = get_or_create_user(db, username, role)
    return create_access_token(user.id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a bearer token for a user")
    parser.add_argument("username", help="Account name")
    parser.add_argument("--role", choices=ROLES, default="member")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        print(issue_token(db, args.username, args.role))
    finally:
        db.close()


if __name__ == "__main__":
    main()
