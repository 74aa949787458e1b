"""关注 API."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from gator.api.deps import get_store, require_user
from gator.core.store import FeedStore, StoreConflictError

router = APIRouter(prefix="/api/users/{user_name}/follows", tags=["follows"])


class FollowRequest(BaseModel):
    """关注请求."""

    url: str = Field(min_length=1)


@router.post("", status_code=201)
async def follow_feed(
    user_name: str,
    body: FollowRequest,
    store: FeedStore = Depends(get_store),
) -> dict:
    """按 URL 关注已添加的 Feed."""
    user = await require_user(store, user_name)

    feed = await store.get_feed_by_url(body.url)
    if feed is None:
        raise HTTPException(status_code=404, detail="Feed 不存在，请先添加")

    try:
        follow = await store.create_feed_follow(feed.id, user.id)
    except StoreConflictError as e:
        raise HTTPException(status_code=409, detail="已关注该 Feed") from e

    return {"id": follow.id, "feed_name": feed.name, "user_name": user.name}


@router.get("")
async def list_following(
    user_name: str,
    store: FeedStore = Depends(get_store),
) -> dict:
    """用户关注的 Feed."""
    user = await require_user(store, user_name)
    rows = await store.list_follows_for_user(user.id)
    return {
        "total": len(rows),
        "items": [
            {"feed_id": follow.feed_id, "feed_name": feed_name}
            for follow, feed_name in rows
        ],
    }


@router.delete("")
async def unfollow_feed(
    user_name: str,
    url: str = Query(..., min_length=1, description="Feed URL"),
    store: FeedStore = Depends(get_store),
) -> dict:
    """取消关注."""
    user = await require_user(store, user_name)
    if not await store.delete_feed_follow(user.id, url):
        raise HTTPException(status_code=404, detail="Feed 不存在或未关注")
    return {"success": True, "url": url}
