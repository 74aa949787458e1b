"""测试配置和 fixtures."""

from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gator.core.store import FeedStore
from gator.models.database import create_engine, create_session_factory, create_tables
from gator.models.feed import Feed
from gator.models.user import User


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """创建测试用的内存数据库会话工厂."""
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)

    yield create_session_factory(engine)

    await engine.dispose()


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> FeedStore:
    """测试用的存储接口."""
    return FeedStore(session_factory)


@pytest_asyncio.fixture
async def sample_user(store: FeedStore) -> User:
    """创建测试用的用户."""
    return await store.create_user("kahya")


@pytest_asyncio.fixture
async def sample_feed(store: FeedStore, sample_user: User) -> Feed:
    """创建测试用的 Feed."""
    return await store.create_feed(
        "Test Feed", "https://example.com/feed.xml", sample_user.id
    )


def _rss_item(item: dict[str, str]) -> str:
    fields = "".join(f"<{key}>{value}</{key}>" for key, value in item.items())
    return f"<item>{fields}</item>"


@pytest.fixture
def build_rss() -> Callable[..., str]:
    """生成 RSS 文档，channel 字段传 None 表示省略."""

    def _build(
        items: list[dict[str, str]],
        title: str | None = "Test Feed",
        link: str | None = "https://example.com",
        description: str | None = "A test feed",
    ) -> str:
        channel = ""
        if title is not None:
            channel += f"<title>{title}</title>"
        if link is not None:
            channel += f"<link>{link}</link>"
        if description is not None:
            channel += f"<description>{description}</description>"
        channel += "".join(_rss_item(item) for item in items)
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            f'<rss version="2.0"><channel>{channel}</channel></rss>'
        )

    return _build


@pytest.fixture
def sample_items() -> list[dict[str, str]]:
    """两篇字段完整的条目."""
    return [
        {
            "title": "First Post",
            "link": "https://example.com/posts/1",
            "description": "<![CDATA[<p>First <b>body</b></p>]]>",
            "pubDate": "Mon, 06 Jan 2025 10:00:00 +0000",
        },
        {
            "title": "Second Post",
            "link": "https://example.com/posts/2",
            "description": "Second body",
            "pubDate": "Tue, 07 Jan 2025 10:00:00 +0000",
        },
    ]
