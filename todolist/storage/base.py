from abc import ABC, abstractmethod
from typing import Optional

from ..models.task import Task


class TaskStore(ABC):
    """任务存储接口，内存实现与 SQLite 实现可互换"""

    @abstractmethod
    def create(self, title: str, completed: bool = False) -> Task:
        """创建任务并分配新 ID，返回存储后的任务"""

    @abstractmethod
    def list_all(self) -> list[Task]:
        """按 ID（即插入）顺序返回全部任务"""

    @abstractmethod
    def get(self, task_id: int) -> Optional[Task]:
        """按 ID 查询任务，不存在返回 None"""

    @abstractmethod
    def update(self, task_id: int, title: str, completed: bool) -> Optional[Task]:
        """整体替换任务的标题与状态，不存在返回 None"""

    @abstractmethod
    def delete(self, task_id: int) -> bool:
        """删除任务，不存在返回 False"""

    def close(self) -> None:
        """释放存储资源"""
