import threading
import logging
from typing import Dict, Optional

from ..models.task import Task
from .base import TaskStore

logger = logging.getLogger(__name__)


class InMemoryTaskStore(TaskStore):
    """内存任务存储，所有读写都在同一把互斥锁内完成"""

    def __init__(self):
        self._tasks: Dict[int, Task] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, title: str, completed: bool = False) -> Task:
        with self._lock:
            task = Task(id=self._next_id, title=title, completed=completed)
            self._tasks[task.id] = task
            self._next_id += 1
            return task.model_copy()

    def list_all(self) -> list[Task]:
        with self._lock:
            return [task.model_copy() for task in self._tasks.values()]

    def get(self, task_id: int) -> Optional[Task]:
        with self._lock:
            task = self._tasks.get(task_id)
            return task.model_copy() if task else None

    def update(self, task_id: int, title: str, completed: bool) -> Optional[Task]:
        with self._lock:
            if task_id not in self._tasks:
                return None
            # 原位替换，保持插入顺序
            task = Task(id=task_id, title=title, completed=completed)
            self._tasks[task_id] = task
            return task.model_copy()

    def delete(self, task_id: int) -> bool:
        with self._lock:
            if task_id in self._tasks:
                del self._tasks[task_id]
                return True
            return False

    def close(self) -> None:
        with self._lock:
            logger.info(f"内存存储关闭，丢弃 {len(self._tasks)} 条任务")
            self._tasks.clear()
