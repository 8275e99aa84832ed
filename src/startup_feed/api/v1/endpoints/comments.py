# src/startup_feed/api/v1/endpoints/comments.py
"""Comment-related endpoints."""

from fastapi import APIRouter, status

from startup_feed.schemas.post import (
    CommentCreate,
    CommentCreated,
    CommentListResponse,
    CommentView,
    LikeResponse,
)
from startup_feed.services import comment_service
from startup_feed.services.like_service import toggle_comment_like

from ..dependencies import (
    AdminUserDep,
    CurrentUserDep,
    FeedAssemblerDep,
    OptionalUserDep,
    SettingsDep,
    StoreDep,
)

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=CommentListResponse)
async def list_all_comments(store: StoreDep, _admin: AdminUserDep) -> CommentListResponse:
    """Return every comment for moderation."""
    comments = await comment_service.list_comments(store)
    return CommentListResponse(
        comments=[CommentView.model_validate(c.model_dump()) for c in comments]
    )


@router.get("/post/{post_id}", response_model=CommentListResponse)
async def list_post_comments(
    post_id: int,
    feed: FeedAssemblerDep,
    viewer: OptionalUserDep,
) -> CommentListResponse:
    """Return the comments of one post, oldest first."""
    comments = await feed.get_comments(post_id, viewer.email if viewer else None)
    return CommentListResponse(comments=comments)


@router.post(
    "/post/{post_id}",
    response_model=CommentCreated,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    payload: CommentCreate,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> CommentCreated:
    """Comment on a post as the authenticated user."""
    comment = await comment_service.add_comment(
        store, post_id, current_user, payload.content, payload.attachments
    )
    return CommentCreated(
        message="Comment added successfully",
        comment=CommentView.model_validate(comment.model_dump()),
    )


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: int,
    store: StoreDep,
    current_user: CurrentUserDep,
    config: SettingsDep,
) -> dict[str, str]:
    """Delete one comment (author or admin only)."""
    await comment_service.delete_comment(store, comment_id, current_user, config)
    return {"message": "Comment deleted successfully"}


@router.post("/{comment_id}/like", response_model=LikeResponse)
async def like_comment(
    comment_id: int, store: StoreDep, current_user: CurrentUserDep
) -> LikeResponse:
    """Toggle the caller's like on a comment."""
    result = await toggle_comment_like(store, comment_id, current_user)
    return LikeResponse(message=result.message, likes_count=result.likes_count)
