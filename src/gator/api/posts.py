"""文章浏览 API."""

from fastapi import APIRouter, Depends, Query

from gator.api.deps import get_store, require_user
from gator.config import get_settings
from gator.core.store import FeedStore
from gator.utils.html_parser import html_to_text

router = APIRouter(prefix="/api/users/{user_name}/posts", tags=["posts"])


@router.get("")
async def browse_posts(
    user_name: str,
    limit: int | None = Query(default=None, ge=1, description="返回数量"),
    store: FeedStore = Depends(get_store),
) -> dict:
    """浏览关注的 Feed 中最新的文章."""
    user = await require_user(store, user_name)
    limit = limit or get_settings().browse_default_limit

    rows = await store.list_posts_for_user(user.id, limit=limit)
    return {
        "total": len(rows),
        "items": [
            {
                "id": post.id,
                "title": post.title,
                "url": post.url,
                "description": post.description,
                "description_text": html_to_text(post.description),
                "published_at": (
                    post.published_at.isoformat() if post.published_at else None
                ),
                "feed_name": feed_name,
            }
            for post, feed_name in rows
        ],
    }
