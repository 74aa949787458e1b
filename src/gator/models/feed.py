"""Feed 订阅源模型."""

from datetime import datetime
from uuid import uuid4

from sqlmodel import Field, SQLModel


class Feed(SQLModel, table=True):
    """RSS 订阅源."""

    __tablename__ = "feeds"  # type: ignore[assignment]

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(unique=True, description="Feed 名称")
    url: str = Field(unique=True, description="Feed URL")
    user_id: str | None = Field(
        default=None,
        foreign_key="users.id",
        ondelete="CASCADE",
        description="添加者",
    )
    last_fetched_at: datetime | None = Field(
        default=None, index=True, description="最近一次抓取时间，NULL 表示从未抓取"
    )
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
