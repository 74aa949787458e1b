"""核心业务逻辑."""

from gator.core.fetcher import FeedFetcher, FetchError
from gator.core.rss import InvalidFeedError, RSSFeed, RSSItem, parse_feed
from gator.core.scrape import FetchMarkPolicy, ScrapeResult, ScrapeService
from gator.core.store import FeedStore, StoreConflictError

__all__ = [
    "FeedFetcher",
    "FeedStore",
    "FetchError",
    "FetchMarkPolicy",
    "InvalidFeedError",
    "RSSFeed",
    "RSSItem",
    "ScrapeResult",
    "ScrapeService",
    "StoreConflictError",
    "parse_feed",
]
