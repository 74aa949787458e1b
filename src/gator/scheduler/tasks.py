"""抓取任务组装."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gator.config import Settings
from gator.core.fetcher import FeedFetcher
from gator.core.scrape import FetchMarkPolicy, ScrapeService
from gator.core.store import FeedStore
from gator.scheduler.poller import FeedPoller


def create_scrape_service(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
) -> ScrapeService:
    """按配置创建抓取服务."""
    fetcher = FeedFetcher(
        user_agent=settings.user_agent,
        timeout=settings.fetch_timeout_seconds,
    )
    return ScrapeService(
        FeedStore(session_factory),
        fetcher,
        mark_policy=FetchMarkPolicy(settings.fetch_mark_policy),
    )


def create_poller(
    settings: Settings, service: ScrapeService, period_ms: int
) -> FeedPoller:
    """创建定时抓取调度器（未启动）."""
    return FeedPoller(
        service.scrape_next_feed,
        period_ms,
        allow_overlap=settings.allow_overlapping_ticks,
    )
