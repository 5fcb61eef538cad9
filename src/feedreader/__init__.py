"""FeedReader - 订阅源阅读后端."""

__version__ = "0.1.0"
