import logging
from ..exceptions import TaskNotFoundError, TaskValidationError
from ..models.task import Task
from ..storage.base import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, store: TaskStore):
        self.store = store

    def create_task(self, title: str, completed: bool = False) -> Task:
        """校验标题后创建任务"""
        self._validate_title(title)
        task = self.store.create(title, completed)
        logger.info(f"任务已创建: {task.id}, 标题: {task.title}")
        return task

    def list_tasks(self) -> list[Task]:
        """列出全部任务"""
        return self.store.list_all()

    def get_task(self, task_id: int) -> Task:
        """查询单个任务"""
        task = self.store.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task(self, task_id: int, title: str, completed: bool) -> Task:
        """整体替换任务标题与状态"""
        self._validate_title(title)
        task = self.store.update(task_id, title, completed)
        if task is None:
            logger.warning(f"更新失败，任务不存在: {task_id}")
            raise TaskNotFoundError(task_id)
        logger.info(f"任务已更新: {task_id}, 完成: {task.completed}")
        return task

    def delete_task(self, task_id: int) -> None:
        """删除任务"""
        if not self.store.delete(task_id):
            logger.warning(f"删除失败，任务不存在: {task_id}")
            raise TaskNotFoundError(task_id)
        logger.info(f"任务已删除: {task_id}")

    @staticmethod
    def _validate_title(title: str) -> None:
        # 创建与更新使用同一规则
        if not title or not title.strip():
            raise TaskValidationError("Task title cannot be empty")
        try:
            title.encode("utf-8")
        except UnicodeEncodeError:
            raise TaskValidationError("Task title must be valid UTF-8 text")
