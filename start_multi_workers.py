#!/usr/bin/env python3
"""
使用多 worker 模式启动后端服务
内存存储在各 worker 之间不共享，仅 sqlite 后端支持多 worker
"""
import sys
import os

# 添加项目根目录到路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

if __name__ == "__main__":
    import uvicorn
    from todolist.config import settings

    if settings.storage_backend == "memory" and settings.workers > 1:
        print("✗ 内存存储不支持多 worker 模式，请设置 TODOLIST_STORAGE=sqlite")
        sys.exit(1)

    print("=" * 50)
    print("🚀 启动 Todolist 后端 (多 Worker 模式)")
    print("=" * 50)
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Workers: {settings.workers}")
    print(f"Storage: {settings.storage_backend}")
    print("注意: 多 worker 模式不支持代码热重载")
    print("=" * 50)

    uvicorn.run(
        "todolist.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        log_level=settings.log_level.lower()
    )
