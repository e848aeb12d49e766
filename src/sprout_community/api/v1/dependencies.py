"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sprout_community.core.actor import Actor
from sprout_community.core.errors import AuthenticationError
from sprout_community.core.security import decode_access_token
from sprout_community.db.session import get_db
from sprout_community.models import User

# auto_error is off so a missing header surfaces as 401 rather than 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _load_actor(token: str, db: Session) -> Actor:
    user_id = decode_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return Actor.from_user(user)


def get_current_actor(credentials: CredentialsDep, db: SessionDep) -> Actor:
    """Resolve the bearer token into the acting user.

    Raises:
        AuthenticationError: If no token is supplied, it is invalid, or the
            user no longer exists.
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    return _load_actor(credentials.credentials, db)


def get_optional_actor(credentials: CredentialsDep, db: SessionDep) -> Actor | None:
    """Resolve the bearer token if one is present; anonymous callers get None."""
    if credentials is None:
        return None
    return _load_actor(credentials.credentials, db)


def get_current_user(actor: Annotated[Actor, Depends(get_current_actor)], db: SessionDep) -> User:
    """Return the ORM row of the acting user."""
    user = db.get(User, actor.id)
    if user is None:  # pragma: no cover - deleted between lookups
        raise AuthenticationError("User not found")
    return user


# Type aliases for identity dependencies
ActorDep = Annotated[Actor, Depends(get_current_actor)]
OptionalActorDep = Annotated[Actor | None, Depends(get_optional_actor)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
