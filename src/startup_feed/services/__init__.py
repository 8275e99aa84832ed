"""Service layer: counter-consistent writes, feed reads and accounts."""

from .comment_service import add_comment, delete_comment, list_comments
from .feed import FeedAssembler, NoSeeder, SampleFeedSeeder, seeder_for
from .like_service import LikeToggleResult, toggle_comment_like, toggle_like, toggle_post_like
from .post_service import create_post, delete_post, get_post
from .rules import is_admin

__all__ = [
    "add_comment", "delete_comment", "list_comments",
    "FeedAssembler", "NoSeeder", "SampleFeedSeeder", "seeder_for",
    "LikeToggleResult", "toggle_comment_like", "toggle_like", "toggle_post_like",
    "create_post", "delete_post", "get_post",
    "is_admin",
]
