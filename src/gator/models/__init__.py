"""数据模型."""

from gator.models.feed import Feed
from gator.models.feed_follow import FeedFollow
from gator.models.post import Post
from gator.models.user import User

__all__ = [
    "Feed",
    "FeedFollow",
    "Post",
    "User",
]
