"""阅读器自定义异常."""


class ReaderError(Exception):
    """阅读器异常基类."""


class ArticleNotFoundError(ReaderError):
    """文章不存在.

    Attributes:
        article_id: 未找到的文章 ID.
    """

    def __init__(self, article_id: str) -> None:
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class FeedNotFoundError(ReaderError):
    """订阅源不存在."""

    def __init__(self, feed_id: str) -> None:
        super().__init__(f"Feed not found: {feed_id}")
        self.feed_id = feed_id


class FolderNotFoundError(ReaderError):
    """文件夹不存在."""

    def __init__(self, folder_id: str) -> None:
        super().__init__(f"Folder not found: {folder_id}")
        self.folder_id = folder_id


class SeedDataError(ReaderError):
    """初始数据集不满足数据模型约束."""


class SeedFailure(ReaderError):
    """初始化数据写入失败.

    网关保持未初始化状态，下一次调用会重新尝试。

    Attributes:
        reason: 失败原因.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Seeding failed: {reason}")
        self.reason = reason
