"""Feed 存储 - 每个操作使用独立会话，单独提交."""

import logging
from datetime import datetime

from sqlalchemy import delete, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import col, select

from gator.models.feed import Feed
from gator.models.feed_follow import FeedFollow
from gator.models.post import Post
from gator.models.user import User

logger = logging.getLogger(__name__)


class StoreConflictError(Exception):
    """违反唯一约束或外键约束."""


class FeedStore:
    """用户、Feed、关注关系和文章的存储接口."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _insert(self, obj: User | Feed | FeedFollow | Post, what: str) -> None:
        """插入一行，约束冲突时回滚并抛出 StoreConflictError."""
        async with self._session_factory() as session:
            session.add(obj)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                msg = f"{what} 写入冲突: {e.orig}"
                raise StoreConflictError(msg) from e

    # ---- 抓取调度相关 ----

    async def select_most_due_feed(self) -> Feed | None:
        """
        选出最该抓取的 Feed.

        按 last_fetched_at 升序，从未抓取（NULL）的排最前；
        时间相同时按 created_at、id 排序，保证结果稳定。
        """
        stmt = (
            select(Feed)
            .order_by(
                col(Feed.last_fetched_at).asc().nulls_first(),
                col(Feed.created_at).asc(),
                col(Feed.id).asc(),
            )
            .limit(1)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def mark_feed_fetched(
        self, feed_id: str, fetched_at: datetime | None = None
    ) -> bool:
        """
        记录 Feed 的抓取时间.

        只在新时间不早于已记录时间时写入，保证 last_fetched_at 单调不减。
        返回是否实际更新。
        """
        fetched_at = fetched_at or datetime.utcnow()
        stmt = (
            update(Feed)
            .where(col(Feed.id) == feed_id)
            .where(
                or_(
                    col(Feed.last_fetched_at).is_(None),
                    col(Feed.last_fetched_at) <= fetched_at,
                )
            )
            .values(last_fetched_at=fetched_at, updated_at=datetime.utcnow())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount > 0

    async def insert_post(
        self,
        title: str,
        url: str,
        description: str | None,
        published_at: datetime | None,
        feed_id: str,
    ) -> Post:
        """保存一篇文章，URL 已存在时抛出 StoreConflictError."""
        post = Post(
            title=title,
            url=url,
            description=description,
            published_at=published_at,
            feed_id=feed_id,
        )
        await self._insert(post, f"文章 {url}")
        return post

    # ---- 用户 ----

    async def create_user(self, name: str) -> User:
        """注册用户，重名时抛出 StoreConflictError."""
        user = User(name=name)
        await self._insert(user, f"用户 {name}")
        logger.info(f"已创建用户: {name}")
        return user

    async def get_user_by_name(self, name: str) -> User | None:
        """按用户名查找."""
        async with self._session_factory() as session:
            result = await session.execute(select(User).where(col(User.name) == name))
            return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        """按用户名排序的全部用户."""
        async with self._session_factory() as session:
            result = await session.execute(select(User).order_by(col(User.name).asc()))
            return list(result.scalars().all())

    async def reset_users(self) -> int:
        """删除全部用户（级联删除其 Feed、关注和文章）."""
        async with self._session_factory() as session:
            result = await session.execute(delete(User))
            await session.commit()
            return result.rowcount

    # ---- Feed ----

    async def create_feed(self, name: str, url: str, user_id: str) -> Feed:
        """添加 Feed，名称或 URL 重复时抛出 StoreConflictError."""
        feed = Feed(name=name, url=url, user_id=user_id)
        await self._insert(feed, f"Feed {name} ({url})")
        return feed

    async def get_feed_by_url(self, url: str) -> Feed | None:
        async with self._session_factory() as session:
            result = await session.execute(select(Feed).where(col(Feed.url) == url))
            return result.scalar_one_or_none()

    async def list_feeds_with_owners(self) -> list[tuple[Feed, str | None]]:
        """全部 Feed 及其添加者用户名."""
        stmt = (
            select(Feed, User.name)
            .join(User, col(Feed.user_id) == col(User.id), isouter=True)
            .order_by(col(Feed.created_at).asc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [(feed, user_name) for feed, user_name in result.all()]

    # ---- 关注 ----

    async def create_feed_follow(self, feed_id: str, user_id: str) -> FeedFollow:
        """关注 Feed，重复关注时抛出 StoreConflictError."""
        follow = FeedFollow(feed_id=feed_id, user_id=user_id)
        await self._insert(follow, f"关注 feed={feed_id} user={user_id}")
        return follow

    async def list_follows_for_user(self, user_id: str) -> list[tuple[FeedFollow, str]]:
        """用户关注的 Feed 及 Feed 名称."""
        stmt = (
            select(FeedFollow, Feed.name)
            .join(Feed, col(FeedFollow.feed_id) == col(Feed.id))
            .where(col(FeedFollow.user_id) == user_id)
            .order_by(col(FeedFollow.created_at).asc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [(follow, feed_name) for follow, feed_name in result.all()]

    async def delete_feed_follow(self, user_id: str, feed_url: str) -> bool:
        """取消关注，Feed 不存在或未关注时返回 False."""
        feed = await self.get_feed_by_url(feed_url)
        if feed is None:
            return False

        stmt = (
            delete(FeedFollow)
            .where(col(FeedFollow.user_id) == user_id)
            .where(col(FeedFollow.feed_id) == feed.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount > 0

    # ---- 文章 ----

    async def list_posts_for_user(
        self, user_id: str, limit: int = 2
    ) -> list[tuple[Post, str]]:
        """用户关注的 Feed 中最新的文章，按发布时间倒序."""
        stmt = (
            select(Post, Feed.name)
            .join(Feed, col(Post.feed_id) == col(Feed.id))
            .join(FeedFollow, col(FeedFollow.feed_id) == col(Feed.id))
            .where(col(FeedFollow.user_id) == user_id)
            .order_by(
                col(Post.published_at).desc().nulls_last(),
                col(Post.created_at).desc(),
            )
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [(post, feed_name) for post, feed_name in result.all()]
