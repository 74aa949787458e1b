"""Feed 订阅源 API."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from gator.api.deps import get_store, require_user
from gator.core.store import FeedStore, StoreConflictError

router = APIRouter(prefix="/api/feeds", tags=["feeds"])


class AddFeedRequest(BaseModel):
    """添加 Feed 请求."""

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    user_name: str = Field(min_length=1, description="添加者，添加后自动关注")


@router.post("", status_code=201)
async def add_feed(
    body: AddFeedRequest,
    store: FeedStore = Depends(get_store),
) -> dict:
    """添加 Feed 并自动关注."""
    user = await require_user(store, body.user_name)

    try:
        feed = await store.create_feed(body.name, body.url, user.id)
    except StoreConflictError as e:
        raise HTTPException(status_code=409, detail="Feed 名称或 URL 已存在") from e

    await store.create_feed_follow(feed.id, user.id)

    return {
        "id": feed.id,
        "name": feed.name,
        "url": feed.url,
        "user_name": user.name,
        "following": True,
    }


@router.get("")
async def list_feeds(store: FeedStore = Depends(get_store)) -> dict:
    """全部 Feed."""
    rows = await store.list_feeds_with_owners()
    return {
        "total": len(rows),
        "items": [
            {
                "id": feed.id,
                "name": feed.name,
                "url": feed.url,
                "user_name": user_name,
                "last_fetched_at": (
                    feed.last_fetched_at.isoformat() if feed.last_fetched_at else None
                ),
            }
            for feed, user_name in rows
        ],
    }
