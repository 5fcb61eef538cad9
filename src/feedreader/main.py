"""FeedReader 主应用入口."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from feedreader import __version__
from feedreader.api import articles, feeds, reading
from feedreader.config import get_settings
from feedreader.exceptions import SeedFailure
from feedreader.models.database import close_db, init_db

# 配置日志
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """应用生命周期管理."""
    app_settings = get_settings()

    # 启动时只建表，初始数据在首次访问时写入
    logger.info("正在初始化数据库...")
    await init_db(app_settings.database_url)

    logger.info("FeedReader 启动完成！")
    yield

    logger.info("正在关闭...")
    await close_db()
    logger.info("FeedReader 已关闭")


app = FastAPI(
    title="FeedReader",
    description="订阅源阅读后端 - 文件夹、订阅源与文章的已读/收藏状态",
    version=__version__,
    lifespan=lifespan,
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SeedFailure)
async def seed_failure_handler(request: Request, exc: SeedFailure) -> JSONResponse:
    """初始数据写入失败时返回 503，客户端可以重试."""
    logger.error(f"{request.method} {request.url.path} 失败: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# 注册路由
app.include_router(reading.router)
app.include_router(articles.router)
app.include_router(feeds.router)


@app.get("/")
async def root() -> dict:
    """根路径."""
    return {
        "name": "FeedReader",
        "version": __version__,
        "description": "订阅源阅读后端",
    }


@app.get("/health")
async def health() -> dict:
    """健康检查."""
    return {"status": "ok"}


def run() -> None:
    """命令行入口."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "feedreader.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
