"""Error taxonomy for forum operations.

Services raise these exceptions; the API layer registers a handler that turns
them into JSON responses carrying ``status_code``.
"""

from fastapi import status


class ForumError(Exception):
    """Base class for expected failures of forum operations."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ForumError):
    """Malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class AuthenticationError(ForumError):
    """No usable identity accompanies the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class AuthorizationError(ForumError):
    """The actor is authenticated but lacks the required capability."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Insufficient privileges"


class NotFoundError(ForumError):
    """The referenced post or comment does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class NotVotableError(ForumError):
    """Interaction attempted on a post that is not approved."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Post is not open for interaction"


__all__ = [
    "ForumError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "NotVotableError",
]
