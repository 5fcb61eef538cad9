"""文章 API."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from feedreader.api.deps import get_reading_service
from feedreader.core.service import ReadingService
from feedreader.exceptions import ArticleNotFoundError
from feedreader.models.schemas import ArticleRead

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("")
async def list_articles(
    filter: Literal["all", "unread", "starred"] = Query("all", description="筛选条件"),
    service: ReadingService = Depends(get_reading_service),
) -> list[ArticleRead]:
    """获取文章列表（最新发布的在前）."""
    if filter == "unread":
        return await service.get_unread_articles()
    if filter == "starred":
        return await service.get_starred_articles()
    return await service.get_all_articles()


@router.get("/detail")
async def get_article(
    article_id: str = Query(..., description="文章 ID"),
    service: ReadingService = Depends(get_reading_service),
) -> ArticleRead:
    """获取文章详情（article_id 作为 query 参数）."""
    try:
        return await service.get_article(article_id)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="文章不存在") from None


@router.patch("/read")
async def mark_read(
    article_id: str = Query(..., description="文章 ID"),
    read: bool = Query(True, description="是否已读"),
    service: ReadingService = Depends(get_reading_service),
) -> dict:
    """标记文章已读/未读."""
    try:
        article = await service.update_article_read_status(article_id, read)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="文章不存在") from None

    return {"id": article.id, "is_read": article.is_read}


@router.patch("/star")
async def mark_starred(
    article_id: str = Query(..., description="文章 ID"),
    starred: bool = Query(True, description="是否收藏"),
    service: ReadingService = Depends(get_reading_service),
) -> dict:
    """设置收藏状态."""
    try:
        article = await service.update_article_star_status(article_id, starred)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="文章不存在") from None

    return {"id": article.id, "is_starred": article.is_starred}


@router.delete("")
async def delete_article(
    article_id: str = Query(..., description="文章 ID"),
    service: ReadingService = Depends(get_reading_service),
) -> dict:
    """删除文章."""
    try:
        await service.delete_article(article_id)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="文章不存在") from None

    return {"id": article_id, "deleted": True}
