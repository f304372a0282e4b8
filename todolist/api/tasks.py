import logging
import re
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, Response

from ..exceptions import TaskNotFoundError, TaskStoreError, TaskValidationError
from ..models.task import MAX_TASK_ID, ErrorResponse, Task, TaskCreateRequest, TaskUpdateRequest
from ..services.task_service import TaskService
from .responses import json_response, no_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks")

TASK_ID_PATTERN = r"^[0-9]+$"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "请求非法"},
    404: {"model": ErrorResponse, "description": "任务不存在"},
    500: {"model": ErrorResponse, "description": "存储错误"},
}


def get_task_service(request: Request) -> TaskService:
    """从应用状态中获取注入的存储"""
    return TaskService(request.app.state.store)


def parse_task_id(raw: Optional[Union[int, str]]) -> int:
    """
    解析任务ID

    Args:
        raw: 整数，或仅由 ASCII 数字组成的字符串

    Returns:
        int: 1 到 MAX_TASK_ID 之间的任务ID

    Raises:
        HTTPException: ID 缺失或非法（400）
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        task_id = raw
    elif isinstance(raw, str) and re.fullmatch(r"[0-9]+", raw.strip()):
        task_id = int(raw.strip())
    else:
        raise HTTPException(status_code=400, detail="Invalid task ID")
    if not 0 < task_id <= MAX_TASK_ID:
        raise HTTPException(status_code=400, detail="Invalid task ID")
    return task_id


def _storage_failure(e: TaskStoreError) -> HTTPException:
    logger.error(f"存储错误: {e}", exc_info=True)
    return HTTPException(status_code=500, detail=str(e))


@router.post(
    "",
    status_code=201,
    response_model=Task,
    responses=ERROR_RESPONSES,
    summary="创建任务",
)
def create_task(
    request: TaskCreateRequest,
    service: TaskService = Depends(get_task_service),
):
    """
    创建新任务

    - **title**: 任务标题（不能为空）
    - **completed**: 是否已完成（可选，默认 false）
    """
    try:
        task = service.create_task(request.title, request.completed)
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TaskStoreError as e:
        raise _storage_failure(e)
    return json_response(201, task)


@router.get("", response_model=list[Task], responses=ERROR_RESPONSES, summary="列出所有任务")
def list_tasks(service: TaskService = Depends(get_task_service)):
    """列出所有任务，按 ID 顺序；没有任务时返回空数组"""
    try:
        tasks = service.list_tasks()
    except TaskStoreError as e:
        raise _storage_failure(e)
    return json_response(200, tasks)


@router.get("/{task_id}", response_model=Task, responses=ERROR_RESPONSES, summary="查询任务")
def get_task(
    task_id: str = Path(..., pattern=TASK_ID_PATTERN, description="任务ID"),
    service: TaskService = Depends(get_task_service),
):
    try:
        task = service.get_task(parse_task_id(task_id))
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TaskStoreError as e:
        raise _storage_failure(e)
    return json_response(200, task)


@router.put("/{task_id}", response_model=Task, responses=ERROR_RESPONSES, summary="更新任务")
def update_task(
    request: TaskUpdateRequest,
    task_id: str = Path(..., pattern=TASK_ID_PATTERN, description="任务ID"),
    service: TaskService = Depends(get_task_service),
):
    """
    更新任务（标题与状态整体替换）

    - **task_id**: 路径中的任务ID
    - 请求体中的 **id** 可选，若提供必须与路径一致
    """
    path_id = parse_task_id(task_id)
    if request.id is not None and parse_task_id(request.id) != path_id:
        raise HTTPException(status_code=400, detail="Task ID in body does not match path")
    return _update(service, path_id, request)


@router.put("", response_model=Task, responses=ERROR_RESPONSES, summary="更新任务（ID 在请求体中）")
def update_task_by_body(
    request: TaskUpdateRequest,
    service: TaskService = Depends(get_task_service),
):
    """兼容接口：任务ID由请求体的 **id** 字段给出"""
    return _update(service, parse_task_id(request.id), request)


def _update(service: TaskService, task_id: int, request: TaskUpdateRequest) -> Response:
    try:
        task = service.update_task(task_id, request.title, request.completed)
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TaskStoreError as e:
        raise _storage_failure(e)
    return json_response(200, task)


@router.delete(
    "/{task_id}",
    status_code=204,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="删除任务",
)
def delete_task(
    task_id: str = Path(..., pattern=TASK_ID_PATTERN, description="任务ID"),
    service: TaskService = Depends(get_task_service),
):
    return _delete(service, parse_task_id(task_id))


@router.delete(
    "",
    status_code=204,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="删除任务（ID 在查询参数中）",
)
def delete_task_by_query(
    task_id: str = Query(..., alias="id", pattern=TASK_ID_PATTERN, description="任务ID"),
    service: TaskService = Depends(get_task_service),
):
    """兼容接口：DELETE /tasks?id=1"""
    return _delete(service, parse_task_id(task_id))


def _delete(service: TaskService, task_id: int) -> Response:
    try:
        service.delete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TaskStoreError as e:
        raise _storage_failure(e)
    return no_content()
