"""测试文章入库."""

from datetime import datetime

import pytest

from gator.core.ingest import ingest_items, parse_pub_date
from gator.core.rss import RSSItem
from gator.core.store import FeedStore, StoreConflictError
from gator.models.feed import Feed
from gator.models.user import User


def _item(slug: str, pub_date: str = "Mon, 06 Jan 2025 10:00:00 +0000") -> RSSItem:
    return RSSItem(
        title=f"Post {slug}",
        link=f"https://example.com/posts/{slug}",
        description=f"Body {slug}",
        pub_date=pub_date,
    )


class TestParsePubDate:
    """测试发布时间解析."""

    def test_rfc822(self):
        assert parse_pub_date("Mon, 06 Jan 2025 10:00:00 +0000") == datetime(
            2025, 1, 6, 10, 0
        )

    def test_converts_to_utc(self):
        """带时区的时间转换为 UTC."""
        assert parse_pub_date("Mon, 06 Jan 2025 18:00:00 +0800") == datetime(
            2025, 1, 6, 10, 0
        )

    def test_iso8601(self):
        assert parse_pub_date("2025-01-06T10:00:00+00:00") == datetime(
            2025, 1, 6, 10, 0
        )

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "yesterday",
            "06/01/2025 10am",
            "0001-01-01T00:00:00+01:00",
            "9999-12-31T23:00:00-05:00",
        ],
    )
    def test_unparseable(self, value: str):
        assert parse_pub_date(value) is None


class TestIngestItems:
    """测试 ingest_items."""

    async def _collect(self, store: FeedStore, feed_id: str, items: list[RSSItem]):
        return [post async for post in ingest_items(store, feed_id, items)]

    async def test_saves_in_order(
        self, store: FeedStore, sample_feed: Feed, sample_user: User
    ):
        posts = await self._collect(store, sample_feed.id, [_item("1"), _item("2")])

        assert [p.url for p in posts] == [
            "https://example.com/posts/1",
            "https://example.com/posts/2",
        ]
        assert posts[0].published_at == datetime(2025, 1, 6, 10, 0)
        assert posts[0].feed_id == sample_feed.id

    async def test_unparseable_date_saved_as_null(
        self, store: FeedStore, sample_feed: Feed
    ):
        """发布时间无法解析时文章照常保存."""
        posts = await self._collect(store, sample_feed.id, [_item("1", "someday")])

        assert len(posts) == 1
        assert posts[0].published_at is None

    async def test_conflict_stops_remaining(
        self, store: FeedStore, sample_feed: Feed, sample_user: User
    ):
        """重复 URL 之后的条目本轮不再保存，之前保存的保留."""
        await self._collect(store, sample_feed.id, [_item("2")])

        saved = []
        with pytest.raises(StoreConflictError):
            async for post in ingest_items(
                store, sample_feed.id, [_item("1"), _item("2"), _item("3")]
            ):
                saved.append(post.url)

        assert saved == ["https://example.com/posts/1"]

        await store.create_feed_follow(sample_feed.id, sample_user.id)
        rows = await store.list_posts_for_user(sample_user.id, limit=10)
        assert {p.url for p, _ in rows} == {
            "https://example.com/posts/1",
            "https://example.com/posts/2",
        }
