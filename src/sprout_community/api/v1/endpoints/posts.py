# src/sprout_community/api/v1/endpoints/posts.py
"""Post-related endpoints: submission, listing, moderation, votes and comments."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from sprout_community.api.v1.dependencies import ActorDep, OptionalActorDep, SessionDep
from sprout_community.core.actor import Actor
from sprout_community.core.errors import NotFoundError
from sprout_community.core.settings import settings
from sprout_community.models.post import ForumPost
from sprout_community.schemas.comment import CommentCreate, CommentOut
from sprout_community.schemas.post import (
    PostCreate,
    PostDetail,
    PostRejection,
    PostSummary,
    PostUpdate,
)
from sprout_community.schemas.vote import VoteCreate, VoteOut
from sprout_community.services.aggregation import PostQueryService
from sprout_community.services.comments import CommentThread
from sprout_community.services.moderation import ModerationService
from sprout_community.services.votes import VoteLedger

router = APIRouter(prefix="/posts", tags=["posts"])


def get_moderation_service(db: SessionDep) -> ModerationService:
    """Return a moderation service bound to the request session."""
    return ModerationService(db)


def get_query_service(db: SessionDep) -> PostQueryService:
    """Return an aggregation service bound to the request session."""
    return PostQueryService(db)


def get_vote_ledger(db: SessionDep) -> VoteLedger:
    """Return a vote ledger bound to the request session."""
    return VoteLedger(db)


def get_comment_thread(db: SessionDep) -> CommentThread:
    """Return a comment thread service bound to the request session."""
    return CommentThread(db)


ModerationDep = Annotated[ModerationService, Depends(get_moderation_service)]
QueryDep = Annotated[PostQueryService, Depends(get_query_service)]
LedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
ThreadDep = Annotated[CommentThread, Depends(get_comment_thread)]


def _ensure_readable(post: ForumPost, actor: Actor | None) -> None:
    """Hide non-approved posts from everyone but their author and moderators."""
    if post.is_visible:
        return
    if actor is not None and (actor.can_moderate or actor.id == post.author_id):
        return
    raise NotFoundError("Post not found")


@router.get("", response_model=list[PostSummary])
async def list_posts(
    moderation: ModerationDep,
    queries: QueryDep,
    category: str | None = Query(None, description="Filter by category"),
    search: str | None = Query(None, description="Match against title or content"),
    sort: str = Query("recent", description="recent, popular or comments"),
    limit: int = Query(settings.posts_page_size, description="Maximum number of posts"),
    offset: int = Query(0, description="Number of posts to skip"),
) -> list[PostSummary]:
    """List approved posts with vote and comment counts."""
    posts = moderation.list_visible_posts(
        category=category,
        search=search,
        sort=sort,
        limit=limit,
        offset=offset,
    )
    return queries.summarize(posts)


@router.get("/popular", response_model=list[PostSummary])
async def list_popular_posts(
    moderation: ModerationDep,
    queries: QueryDep,
    limit: int = Query(settings.popular_posts_limit, description="Number of posts"),
) -> list[PostSummary]:
    """Return the best-scored approved posts."""
    posts = moderation.list_visible_posts(sort="popular", limit=limit)
    return queries.summarize(posts)


@router.get("/moderation/queue", response_model=list[PostSummary])
async def get_moderation_queue(
    actor: ActorDep,
    moderation: ModerationDep,
    queries: QueryDep,
    post_status: str = Query("pending", alias="status", description="Moderation state"),
    limit: int = Query(settings.posts_page_size),
    offset: int = Query(0),
) -> list[PostSummary]:
    """List posts awaiting (or past) moderation. Moderators only."""
    posts = moderation.list_queue(actor, status=post_status, limit=limit, offset=offset)
    return queries.summarize(posts)


@router.post("", response_model=PostDetail, status_code=status.HTTP_201_CREATED)
async def submit_post(
    post_data: PostCreate,
    actor: ActorDep,
    moderation: ModerationDep,
    queries: QueryDep,
) -> PostDetail:
    """Submit a post; it stays pending until a moderator approves it."""
    post = moderation.submit_post(
        actor,
        title=post_data.title,
        content=post_data.content,
        category=post_data.category,
    )
    return queries.get_post_detail(post.id, actor)


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(
    post_id: int,
    actor: OptionalActorDep,
    moderation: ModerationDep,
    queries: QueryDep,
) -> PostDetail:
    """Return a post with its aggregates."""
    _ensure_readable(moderation.get_post(post_id), actor)
    return queries.get_post_detail(post_id, actor)


@router.patch("/{post_id}", response_model=PostDetail)
async def edit_post(
    post_id: int,
    update: PostUpdate,
    actor: ActorDep,
    moderation: ModerationDep,
    queries: QueryDep,
) -> PostDetail:
    """Edit a post. Author or admin only."""
    moderation.edit_post(
        actor,
        post_id,
        title=update.title,
        content=update.content,
        category=update.category,
    )
    return queries.get_post_detail(post_id, actor)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    actor: ActorDep,
    moderation: ModerationDep,
) -> None:
    """Delete a post with its votes and comments. Author or admin only."""
    moderation.delete_post(actor, post_id)


@router.post("/{post_id}/approve", response_model=PostDetail)
async def approve_post(
    post_id: int,
    actor: ActorDep,
    moderation: ModerationDep,
    queries: QueryDep,
) -> PostDetail:
    """Approve a post. Moderators only."""
    moderation.approve_post(actor, post_id)
    return queries.get_post_detail(post_id, actor)


@router.post("/{post_id}/reject", response_model=PostDetail)
async def reject_post(
    post_id: int,
    rejection: PostRejection,
    actor: ActorDep,
    moderation: ModerationDep,
    queries: QueryDep,
) -> PostDetail:
    """Reject a post with a reason. Moderators only."""
    moderation.reject_post(actor, post_id, rejection.reason)
    return queries.get_post_detail(post_id, actor)


@router.post("/{post_id}/report")
async def report_post(
    post_id: int,
    actor: ActorDep,
    moderation: ModerationDep,
) -> dict[str, int | str]:
    """Flag an approved post for moderator review."""
    post = moderation.report_post(actor, post_id)
    return {"status": "reported", "report_count": post.report_count}


@router.post("/{post_id}/vote", response_model=PostDetail)
async def cast_vote(
    post_id: int,
    vote_data: VoteCreate,
    actor: ActorDep,
    ledger: LedgerDep,
    queries: QueryDep,
) -> PostDetail:
    """Like or dislike a post; a second vote replaces the first."""
    ledger.cast_vote(actor, post_id, vote_data.value)
    return queries.get_post_detail(post_id, actor)


@router.get("/{post_id}/vote", response_model=VoteOut)
async def get_my_vote(
    post_id: int,
    actor: ActorDep,
    ledger: LedgerDep,
) -> VoteOut:
    """Get the current user's vote on a specific post."""
    return VoteOut(value=ledger.get_user_vote(actor, post_id))


@router.get("/{post_id}/comments", response_model=list[CommentOut])
async def list_comments(
    post_id: int,
    actor: OptionalActorDep,
    moderation: ModerationDep,
    thread: ThreadDep,
) -> list[CommentOut]:
    """List a post's comments, oldest first."""
    _ensure_readable(moderation.get_post(post_id), actor)
    return [CommentOut.model_validate(comment) for comment in thread.list_comments(post_id)]


@router.post(
    "/{post_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    comment_data: CommentCreate,
    actor: ActorDep,
    thread: ThreadDep,
) -> CommentOut:
    """Comment on an approved post."""
    comment = thread.add_comment(actor, post_id, comment_data.content)
    return CommentOut.model_validate(comment)
