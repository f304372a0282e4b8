import logging
from typing import Optional
from fastapi import FastAPI
from contextlib import asynccontextmanager

from . import __version__
from .config import settings as default_settings, Settings
from .api import tasks
from .api.responses import register_exception_handlers
from .storage import TaskStore, create_store

# 配置日志
logging.basicConfig(
    level=default_settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(store: Optional[TaskStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    创建应用实例

    Args:
        store: 任务存储（为空时按配置创建）
        settings: 服务配置（为空时使用环境变量配置）

    Returns:
        FastAPI: 应用实例

    Raises:
        TaskStoreError: 存储无法打开
    """
    settings = settings or default_settings
    if store is None:
        store = create_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 启动时初始化
        logger.info("🚀 Todolist API 启动")
        logger.info(f"📦 Storage: {settings.storage_backend}")
        if settings.storage_backend == "sqlite":
            logger.info(f"🗄️ Database: {settings.database_path}")
        yield
        # 关闭时清理
        app.state.store.close()
        logger.info("👋 Todolist API 关闭")

    app = FastAPI(
        title="Todolist API",
        description="最小化任务列表服务，提供任务的增删改查",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.store = store

    register_exception_handlers(app)

    # 路由注册
    app.include_router(tasks.router, tags=["任务管理"])

    @app.get("/health", summary="健康检查", tags=["系统"])
    async def health():
        """检查服务健康状态"""
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "todolist.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )
