"""阅读概览 API."""

from fastapi import APIRouter, Depends

from feedreader.api.deps import get_reading_service
from feedreader.core.service import ReadingService
from feedreader.models.schemas import ReadingData, Stats

router = APIRouter(prefix="/api", tags=["reading"])


@router.get("/reading")
async def get_reading_data(
    service: ReadingService = Depends(get_reading_service),
) -> ReadingData:
    """获取文件夹、订阅源、文章和统计."""
    return await service.get_reading_data()


@router.get("/stats")
async def get_stats(
    service: ReadingService = Depends(get_reading_service),
) -> Stats:
    """获取文章统计."""
    return await service.get_stats()
