# src/sprout_community/api/v1/endpoints/comments.py
"""Comment endpoints that address a comment directly."""

from fastapi import APIRouter, status

from sprout_community.api.v1.dependencies import ActorDep, SessionDep
from sprout_community.services.comments import CommentThread

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    actor: ActorDep,
    db: SessionDep,
) -> None:
    """Delete a comment. Its author or an admin only."""
    CommentThread(db).delete_comment(actor, comment_id)
