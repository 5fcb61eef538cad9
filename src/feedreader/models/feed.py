"""Feed 订阅源模型."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class FeedBase(SQLModel):
    """订阅源公共字段."""

    title: str = Field(description="Feed 标题")
    url: str = Field(description="Feed URL")
    site_url: str | None = Field(default=None, description="网站 URL")
    favicon: str | None = Field(default=None, description="图标 URL")
    folder_id: str | None = Field(
        default=None, foreign_key="folders.id", index=True, description="所属文件夹"
    )
    position: int = Field(default=0, description="创建顺序")
    last_fetched: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True), description="最近抓取时间"
    )


class Feed(FeedBase, table=True):
    """订阅源."""

    __tablename__ = "feeds"  # type: ignore[assignment]

    id: str = Field(primary_key=True)
