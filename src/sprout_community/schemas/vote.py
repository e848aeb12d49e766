# src/sprout_community/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from sprout_community.models.vote import VoteValue


class VoteCreate(BaseModel):
    """Schema for casting a vote; the value is checked by the vote ledger."""

    value: str = Field(..., description="'like' or 'dislike'")


class VoteOut(BaseModel):
    """The caller's current vote on a post, if any."""

    value: VoteValue | None = None
