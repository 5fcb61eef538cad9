"""Article 文章模型."""

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """当前 UTC 时间."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """SQLite 读回的时间不带时区，统一补为 UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ArticleBase(SQLModel):
    """文章公共字段."""

    feed_id: str = Field(foreign_key="feeds.id", index=True, description="关联 Feed")
    title: str = Field(description="标题")
    url: str | None = Field(default=None, description="原文链接")
    author: str | None = Field(default=None, description="作者")
    preview: str = Field(default="", description="摘要")
    content: str = Field(default="", description="正文")
    published_at: datetime = Field(
        sa_type=DateTime(timezone=True), index=True, description="发布时间"
    )
    is_read: bool = Field(default=False, description="是否已读")
    is_starred: bool = Field(default=False, description="是否收藏")


class Article(ArticleBase, table=True):
    """订阅源中的单篇文章."""

    __tablename__ = "articles"  # type: ignore[assignment]

    id: str = Field(primary_key=True)
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        description="最近修改时间",
    )
