# src/sprout_community/schemas/user.py
"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AuthorOut(BaseModel):
    """Public profile attached to posts and comments."""

    id: int
    username: str
    avatar: str | None = Field(None, validation_alias="avatar_url")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class UserOut(AuthorOut):
    """Profile of the authenticated caller, including capabilities."""

    is_admin: bool
    is_moderator: bool
