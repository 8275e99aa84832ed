# src/startup_feed/api/v1/endpoints/posts.py
"""Post-related endpoints."""

from fastapi import APIRouter, status

from startup_feed.schemas.post import (
    FeedResponse,
    LikeResponse,
    PostCreate,
    PostCreated,
    PostView,
)
from startup_feed.services import post_service
from startup_feed.services.like_service import toggle_post_like

from ..dependencies import (
    CurrentUserDep,
    FeedAssemblerDep,
    OptionalUserDep,
    SettingsDep,
    StoreDep,
)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=FeedResponse)
async def list_posts(feed: FeedAssemblerDep, viewer: OptionalUserDep) -> FeedResponse:
    """Return the feed newest first with nested comments and like state."""
    posts = await feed.get_feed(viewer.email if viewer else None)
    return FeedResponse(posts=posts)


@router.post("", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> PostCreated:
    """Publish a post as the authenticated user."""
    post = await post_service.create_post(
        store, current_user, payload.content, payload.attachments
    )
    return PostCreated(
        message="Post created successfully",
        post=PostView.model_validate(post.model_dump()),
    )


@router.delete("/{post_id}")
async def delete_post(
    post_id: int,
    store: StoreDep,
    current_user: CurrentUserDep,
    config: SettingsDep,
) -> dict[str, str]:
    """Delete a post with its comments and likes (author or admin only)."""
    await post_service.delete_post(store, post_id, current_user, config)
    return {"message": "Post deleted successfully"}


@router.post("/{post_id}/like", response_model=LikeResponse)
async def like_post(post_id: int, store: StoreDep, current_user: CurrentUserDep) -> LikeResponse:
    """Toggle the caller's like on a post."""
    result = await toggle_post_like(store, post_id, current_user)
    return LikeResponse(message=result.message, likes_count=result.likes_count)
