"""Gator 主应用入口."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gator.api import feeds, follows, posts, scrape, users
from gator.config import get_settings
from gator.models.database import async_session_maker, close_db, init_db
from gator.scheduler import create_poller, create_scrape_service
from gator.utils.duration import parse_duration

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """应用生命周期管理."""
    app_settings = get_settings()

    # 间隔无效时直接中止启动，调度器不会被创建
    period_ms = parse_duration(app_settings.fetch_interval)

    logger.info("正在初始化数据库...")
    await init_db(app_settings.database_url)

    service = create_scrape_service(app_settings, async_session_maker())
    app.state.scrape_service = service
    app.state.poller = None

    if app_settings.scheduler_enabled:
        logger.info("正在启动定时抓取...")
        app.state.poller = create_poller(app_settings, service, period_ms)
        app.state.poller.start()

    logger.info("Gator 启动完成！")
    yield

    logger.info("正在关闭...")
    if app.state.poller is not None:
        app.state.poller.stop()
    await service.fetcher.close()
    await close_db()
    logger.info("Gator 已关闭")


app = FastAPI(
    title="Gator",
    description="RSS 聚合器 - 定时拉取订阅源并保存新文章",
    version="0.1.0",
    lifespan=lifespan,
)

# 注册路由
app.include_router(users.router)
app.include_router(feeds.router)
app.include_router(follows.router)
app.include_router(posts.router)
app.include_router(scrape.router)


@app.get("/")
async def root() -> dict:
    """根路径."""
    return {
        "name": "Gator",
        "version": "0.1.0",
        "description": "RSS 聚合器",
    }


@app.get("/health")
async def health() -> dict:
    """健康检查."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gator.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
