"""Utility script to prepare the configured database.

Creates the PostgreSQL database if it is missing, creates the forum tables and
optionally promotes (or creates) an administrator account.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql
from sqlalchemy import select
from sqlalchemy.orm import Session

from sprout_community.core.settings import settings
from sprout_community.models import User

logger = logging.getLogger("sprout_community.ensure_db")


def normalize_to_psycopg(uri: str) -> str:
    """Return a Postgres URI suitable for psycopg.connect().

    - Strips quotes and whitespace.
    - Converts SQLAlchemy schemes (postgresql+*) to plain "postgresql".
    """
    uri = (uri or "").strip()
    if (uri.startswith("'") and uri.endswith("'")) or (uri.startswith('"') and uri.endswith('"')):
        uri = uri[1:-1]
    if not uri:
        raise ValueError("DATABASE_URL is empty")

    parts = urlsplit(uri)
    scheme = parts.scheme
    if scheme.startswith("postgresql+"):
        scheme = "postgresql"
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def _split_db_url(db_url: str) -> tuple[str, str]:
    """Return `(admin_url, target_db)` using the maintenance database."""
    parts = urlsplit(normalize_to_psycopg(db_url))
    if not parts.scheme.startswith("postgresql"):
        raise ValueError(f"Unparseable DATABASE_URL (no postgres scheme): {db_url!r}")

    target_db = parts.path.lstrip("/") or "postgres"
    if parts.netloc:
        admin_url = urlunsplit(
            ("postgresql", parts.netloc, "/postgres", parts.query, parts.fragment)
        )
    else:
        # hostless/local-socket style
        admin_url = "postgresql:///postgres"
    return admin_url, target_db


def ensure_database_exists(db_url: str) -> None:
    """Create the configured Postgres database if it is missing."""
    admin_url, target_db = _split_db_url(db_url)
    if os.getenv("ENSURE_DB_DEBUG") == "1":
        logger.debug("admin_url=%r target_db=%r", admin_url, target_db)

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is None:
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
            logger.info("created database %s", target_db)
        else:
            logger.info("database %s already exists", target_db)


def ensure_admin(db: Session, username: str) -> User:
    """Create ``username`` if needed and grant it admin rights."""
    user = db.scalar(select(User).where(User.username == username))
    if user is None:
        user = User(username=username)
        db.add(user)
    user.is_admin = True
    db.commit()
    db.refresh(user)
    return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Ensure the configured database is ready")
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    parser.add_argument(
        "--admin",
        default=None,
        help="Username to create or promote to administrator",
    )
    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level.upper())

    raw_url = args.url or settings.effective_database_url
    try:
        if raw_url.startswith("postgresql"):
            ensure_database_exists(raw_url)

        from sprout_community.db.session import SessionLocal, create_tables

        create_tables()
        if args.admin:
            with SessionLocal() as db:
                user = ensure_admin(db, args.admin)
            logger.info("user %s (id=%s) is an administrator", user.username, user.id)
    except Exception as exc:
        logger.error("ensure_db failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
