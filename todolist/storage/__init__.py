from ..config import Settings
from .base import TaskStore
from .memory_store import InMemoryTaskStore
from .sqlite_store import SqliteTaskStore


def create_store(settings: Settings) -> TaskStore:
    """根据配置创建存储实例"""
    if settings.storage_backend == "memory":
        return InMemoryTaskStore()
    return SqliteTaskStore(settings.database_path)


__all__ = ["TaskStore", "InMemoryTaskStore", "SqliteTaskStore", "create_store"]
