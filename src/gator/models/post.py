"""Post 文章模型."""

from datetime import datetime
from uuid import uuid4

from sqlmodel import Field, SQLModel


class Post(SQLModel, table=True):
    """从 Feed 中抓取到的文章."""

    __tablename__ = "posts"  # type: ignore[assignment]

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str = Field(description="标题")
    url: str = Field(unique=True, description="原文链接（全局唯一）")
    description: str | None = Field(default=None, description="摘要 HTML")
    published_at: datetime | None = Field(default=None, description="发布时间")
    feed_id: str = Field(foreign_key="feeds.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
