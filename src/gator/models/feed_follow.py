"""FeedFollow 关注关系模型."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class FeedFollow(SQLModel, table=True):
    """用户关注的 Feed（每个用户对同一 Feed 只能关注一次）."""

    __tablename__ = "feed_follows"  # type: ignore[assignment]
    __table_args__ = (UniqueConstraint("user_id", "feed_id", name="user_feed_unique"),)

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    feed_id: str = Field(foreign_key="feeds.id", ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
