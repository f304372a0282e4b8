from .task import MAX_TASK_ID, Task, TaskCreateRequest, TaskUpdateRequest, ErrorResponse

__all__ = ["MAX_TASK_ID", "Task", "TaskCreateRequest", "TaskUpdateRequest", "ErrorResponse"]
