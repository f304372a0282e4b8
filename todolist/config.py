"""服务配置

所有配置项均可通过 TODOLIST_* 环境变量覆盖。
"""

import os
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field


ENV_PREFIX = "TODOLIST_"


class Settings(BaseModel):
    """服务配置"""
    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=8080, ge=1, le=65535, description="监听端口")
    storage_backend: Literal["memory", "sqlite"] = Field(default="sqlite", description="存储后端")
    database_path: str = Field(default="todo.db", description="SQLite 数据库文件路径")
    log_level: str = Field(default="INFO", description="日志级别")
    workers: int = Field(default=1, ge=1, description="多 worker 模式下的进程数")


def load_settings(env: Optional[Dict[str, str]] = None) -> Settings:
    """
    从环境变量加载配置

    Args:
        env: 额外的环境变量（覆盖 os.environ，主要用于测试）

    Returns:
        Settings: 配置对象

    Raises:
        pydantic.ValidationError: 配置值非法
    """
    e = dict(os.environ)
    if env:
        e.update(env)

    values = {}
    for name, env_name in (
        ("host", "HOST"),
        ("port", "PORT"),
        ("storage_backend", "STORAGE"),
        ("database_path", "DB_PATH"),
        ("log_level", "LOG_LEVEL"),
        ("workers", "WORKERS"),
    ):
        raw = e.get(ENV_PREFIX + env_name, "").strip()
        if raw:
            values[name] = raw

    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()
    return Settings(**values)


settings = load_settings()
