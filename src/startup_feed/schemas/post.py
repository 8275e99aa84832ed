# src/startup_feed/schemas/post.py
"""Post, comment and like schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from startup_feed.models import Comment, Post


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    content: str | None = Field("", max_length=5000, description="Post text")
    attachments: list[str] = Field(default_factory=list, description="Attachment references")


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    content: str | None = Field("", max_length=2000, description="Comment text")
    attachments: list[str] = Field(default_factory=list, description="Attachment references")


class CommentView(Comment):
    """Comment as shown to one viewer."""

    is_liked: bool = False


class PostView(Post):
    """Post joined with its comments and the viewer's like state."""

    comments: list[CommentView] = Field(default_factory=list)
    is_liked: bool = False


class FeedResponse(BaseModel):
    """Feed returned by `GET /posts`."""

    posts: list[PostView]


class CommentListResponse(BaseModel):
    """Comments returned by the comment listing endpoints."""

    comments: list[CommentView]


class PostCreated(BaseModel):
    """Response for a newly created post."""

    message: str
    post: PostView


class CommentCreated(BaseModel):
    """Response for a newly created comment."""

    message: str
    comment: CommentView


class LikeResponse(BaseModel):
    """Result of a like toggle."""

    message: Literal["liked", "unliked"]
    likes_count: int
