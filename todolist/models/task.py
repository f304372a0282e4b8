from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr
from typing import Optional, Union


# SQLite INTEGER 主键上限
MAX_TASK_ID = 2 ** 63 - 1


class Task(BaseModel):
    """任务模型"""
    id: int = Field(..., description="任务ID（由存储层分配）")
    title: str = Field(..., description="任务标题")
    completed: bool = Field(default=False, description="是否已完成")


class TaskCreateRequest(BaseModel):
    """创建任务请求"""
    title: StrictStr = Field(..., description="任务标题（不能为空）")
    completed: StrictBool = Field(default=False, description="是否已完成，缺省为 false")


class TaskUpdateRequest(BaseModel):
    """更新任务请求（标题与状态整体替换）"""
    id: Optional[Union[StrictInt, StrictStr]] = Field(None, description="任务ID（可选，兼容字符串形式）")
    title: StrictStr = Field(..., description="新的任务标题")
    completed: StrictBool = Field(..., description="新的完成状态")


class ErrorResponse(BaseModel):
    """错误响应"""
    error: str
