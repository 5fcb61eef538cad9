"""订阅源与文件夹 API."""

from fastapi import APIRouter, Depends, HTTPException

from feedreader.api.deps import get_reading_service
from feedreader.core.service import ReadingService
from feedreader.exceptions import FeedNotFoundError, FolderNotFoundError
from feedreader.models.schemas import ArticleRead, FeedRead, FolderRead

router = APIRouter(prefix="/api", tags=["feeds"])


@router.get("/feeds")
async def list_feeds(
    service: ReadingService = Depends(get_reading_service),
) -> list[FeedRead]:
    """获取订阅列表."""
    return await service.get_all_feeds()


@router.get("/feeds/{feed_id}/articles")
async def list_feed_articles(
    feed_id: str,
    service: ReadingService = Depends(get_reading_service),
) -> list[ArticleRead]:
    """获取某个订阅源的文章."""
    try:
        return await service.get_articles_by_feed(feed_id)
    except FeedNotFoundError:
        raise HTTPException(status_code=404, detail="Feed 不存在") from None


@router.get("/folders")
async def list_folders(
    service: ReadingService = Depends(get_reading_service),
) -> list[FolderRead]:
    """获取文件夹列表."""
    return await service.get_all_folders()


@router.get("/folders/{folder_id}/articles")
async def list_folder_articles(
    folder_id: str,
    service: ReadingService = Depends(get_reading_service),
) -> list[ArticleRead]:
    """获取某个文件夹下的文章."""
    try:
        return await service.get_articles_by_folder(folder_id)
    except FolderNotFoundError:
        raise HTTPException(status_code=404, detail="文件夹不存在") from None
