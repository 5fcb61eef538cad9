"""Folder 文件夹模型."""

from sqlmodel import Field, SQLModel


class FolderBase(SQLModel):
    """文件夹公共字段."""

    name: str = Field(description="显示名称")
    parent_id: str | None = Field(
        default=None, foreign_key="folders.id", description="父文件夹"
    )
    position: int = Field(default=0, description="创建顺序")


class Folder(FolderBase, table=True):
    """订阅源分组文件夹."""

    __tablename__ = "folders"  # type: ignore[assignment]

    id: str = Field(primary_key=True)
