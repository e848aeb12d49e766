"""Bearer token helpers built on python-jose."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from sprout_community.core.errors import AuthenticationError
from sprout_community.core.settings import settings


def create_access_token(user_id: int) -> str:
    """Create a signed JWT whose subject is the user's id."""
    to_encode: dict[str, object] = {"sub": str(user_id)}
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        AuthenticationError: If the token is expired, forged or has no usable subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise AuthenticationError() from err

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationError()
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise AuthenticationError() from err
