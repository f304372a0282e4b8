"""todolist - 最小化任务列表 Web 服务"""

__version__ = "1.0.0"
