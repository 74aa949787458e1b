"""把校验通过的条目写入文章表."""

import logging
from collections.abc import AsyncIterator, Iterable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from gator.core.rss import RSSItem
from gator.core.store import FeedStore
from gator.models.post import Post

logger = logging.getLogger(__name__)


def parse_pub_date(value: str) -> datetime | None:
    """
    解析 pubDate，返回 UTC naive 时间.

    先按 RFC 822（RSS 标准格式）解析，失败再尝试 ISO 8601；
    都失败时返回 None，由调用方存为 NULL。
    """
    value = value.strip()
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        # 接近 datetime 上下限的时间换算到 UTC 时会溢出
        try:
            parsed = parsed.astimezone(UTC).replace(tzinfo=None)
        except OverflowError:
            return None
    return parsed


async def ingest_items(
    store: FeedStore, feed_id: str, items: Iterable[RSSItem]
) -> AsyncIterator[Post]:
    """
    按文档顺序逐条保存文章，每保存一篇就 yield 一篇.

    某条写入失败（如 URL 重复）时 StoreConflictError 直接抛出，
    后续条目不再处理，已保存的文章不回滚。
    """
    for item in items:
        published_at = parse_pub_date(item.pub_date)
        if published_at is None:
            logger.warning(f"无法解析发布时间 {item.pub_date!r}，按空值保存: {item.link}")

        post = await store.insert_post(
            title=item.title,
            url=item.link,
            description=item.description,
            published_at=published_at,
            feed_id=feed_id,
        )
        yield post
