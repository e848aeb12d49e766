# src/sprout_community/api/v1/endpoints/users.py
"""User profile endpoints."""

from fastapi import APIRouter

from sprout_community.api.v1.dependencies import CurrentUserDep
from sprout_community.schemas.user import UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserOut)
async def get_me(current_user: CurrentUserDep) -> UserOut:
    """Return the authenticated user's profile and capabilities."""
    return UserOut.model_validate(current_user)
