"""抓取周期 - 选 Feed、标记、下载、解析、入库."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from gator.core.fetcher import FeedFetcher, FetchError
from gator.core.ingest import ingest_items
from gator.core.rss import InvalidFeedError, parse_feed
from gator.core.store import FeedStore, StoreConflictError

logger = logging.getLogger(__name__)


class FetchMarkPolicy(StrEnum):
    """何时记录 Feed 的抓取时间."""

    # 下载前先标记：一直失败的 Feed 不会每个周期都被选中，但失败后要等下一轮
    OPTIMISTIC = "optimistic"
    # 下载并解析成功后才标记：失败的 Feed 下个周期会被再次选中
    AFTER_SUCCESS = "after_success"


class ScrapeStep(StrEnum):
    """周期内的步骤，用于定位失败位置."""

    MARK = "mark"
    FETCH = "fetch"
    PARSE = "parse"
    INGEST = "ingest"


@dataclass
class ScrapeResult:
    """单个抓取周期的结果."""

    feed_id: str | None = None
    feed_name: str | None = None
    feed_url: str | None = None
    items_found: int = 0
    posts_created: int = 0
    failed_step: ScrapeStep | None = None
    error: str | None = None
    started_at: datetime = field(default_factory=datetime.utcnow)
    completed_at: datetime | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class ScrapeService:
    """执行一次抓取周期."""

    def __init__(
        self,
        store: FeedStore,
        fetcher: FeedFetcher,
        mark_policy: FetchMarkPolicy = FetchMarkPolicy.OPTIMISTIC,
    ) -> None:
        self.store = store
        self.fetcher = fetcher
        self.mark_policy = mark_policy

    async def scrape_next_feed(self) -> ScrapeResult:
        """
        抓取最该更新的一个 Feed.

        下载失败、文档无效、文章写入冲突以及其它异常都只记录日志并写入结果，
        不会向上抛出；写入冲突时该 Feed 剩余条目本轮跳过。
        """
        result = ScrapeResult()

        logger.info("正在查找待抓取的 Feed...")
        feed = await self.store.select_most_due_feed()
        if feed is None:
            logger.info("没有可抓取的 Feed")
            result.completed_at = datetime.utcnow()
            return result

        result.feed_id = feed.id
        result.feed_name = feed.name
        result.feed_url = feed.url
        logger.info(f"开始抓取 Feed: {feed.name} ({feed.url})")

        step = ScrapeStep.MARK
        try:
            if self.mark_policy == FetchMarkPolicy.OPTIMISTIC:
                await self.store.mark_feed_fetched(feed.id)

            step = ScrapeStep.FETCH
            document = await self.fetcher.fetch(feed.url)

            step = ScrapeStep.PARSE
            rss_feed = parse_feed(document)
            result.items_found = len(rss_feed.items)

            if self.mark_policy == FetchMarkPolicy.AFTER_SUCCESS:
                step = ScrapeStep.MARK
                await self.store.mark_feed_fetched(feed.id)

            logger.info(f"{feed.name} 中找到 {result.items_found} 篇文章")

            step = ScrapeStep.INGEST
            async for post in ingest_items(self.store, feed.id, rss_feed.items):
                result.posts_created += 1
                logger.info(f"  {result.posts_created}. {post.title}")

        except (FetchError, InvalidFeedError, StoreConflictError) as e:
            result.failed_step = step
            result.error = str(e)
            logger.warning(
                f"抓取 Feed 失败: feed_id={feed.id}, name={feed.name}, "
                f"url={feed.url}, step={step}, 已保存={result.posts_created}, "
                f"error={e}"
            )
        except Exception as e:
            result.failed_step = step
            result.error = f"{type(e).__name__}: {e}"
            logger.exception(
                f"抓取 Feed 出现未预期的错误: feed_id={feed.id}, name={feed.name}, "
                f"url={feed.url}, step={step}, 已保存={result.posts_created}"
            )

        result.completed_at = datetime.utcnow()
        return result
