"""API 依赖."""

from fastapi import HTTPException, Request

from gator.core.scrape import ScrapeService
from gator.core.store import FeedStore
from gator.models.database import async_session_maker
from gator.models.user import User
from gator.scheduler.poller import FeedPoller


def get_store() -> FeedStore:
    """获取存储接口."""
    return FeedStore(async_session_maker())


def get_scrape_service(request: Request) -> ScrapeService:
    """获取应用启动时创建的抓取服务."""
    return request.app.state.scrape_service


def get_poller(request: Request) -> FeedPoller | None:
    """获取定时调度器（未启用时为 None）."""
    return getattr(request.app.state, "poller", None)


async def require_user(store: FeedStore, user_name: str) -> User:
    """按用户名查找，不存在返回 404."""
    user = await store.get_user_by_name(user_name)
    if user is None:
        raise HTTPException(status_code=404, detail=f"用户 {user_name} 不存在")
    return user
