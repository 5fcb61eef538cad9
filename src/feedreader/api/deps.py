"""API 依赖."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from feedreader.core.gate import get_gate
from feedreader.core.service import ReadingService
from feedreader.models.database import get_session


async def get_reading_service(
    session: AsyncSession = Depends(get_session),
) -> ReadingService:
    """获取经过访问网关的阅读服务."""
    return ReadingService(session, get_gate())
