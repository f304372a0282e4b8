"""任务服务自定义异常"""


class TaskError(Exception):
    """任务处理基础异常"""
    pass


class TaskValidationError(TaskError):
    """任务数据校验错误（标题为空、ID 非法等）"""
    pass


class TaskNotFoundError(TaskError):
    """目标任务不存在"""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__("Task not found")


class TaskStoreError(TaskError):
    """存储层错误（I/O 失败、约束冲突、连接断开）"""
    pass
