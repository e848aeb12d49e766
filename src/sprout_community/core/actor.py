"""Explicit identity context passed into every forum operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sprout_community.models.user import User

UserId = int


@dataclass(frozen=True)
class Actor:
    """Authenticated identity performing an operation.

    Attributes:
        id: Primary key of the backing user row.
        username: Public handle, used for logging only.
        is_admin: Full administrative capability.
        is_moderator: May approve or reject posts without being an admin.
    """

    id: UserId
    username: str
    is_admin: bool = False
    is_moderator: bool = False

    @property
    def can_moderate(self) -> bool:
        """Return True if the actor may move posts between moderation states."""
        return self.is_admin or self.is_moderator

    def can_manage(self, owner_id: UserId) -> bool:
        """Return True if the actor may edit or delete content owned by ``owner_id``."""
        return self.is_admin or self.id == owner_id

    @classmethod
    def from_user(cls, user: User) -> Actor:
        """Build an actor from a persisted user row."""
        return cls(
            id=user.id,
            username=user.username,
            is_admin=bool(user.is_admin),
            is_moderator=bool(user.is_moderator),
        )
