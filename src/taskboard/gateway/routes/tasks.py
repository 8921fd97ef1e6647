"""任务路由

GET    /tasks                  任务列表（含 Genre）
POST   /tasks                  创建任务
PATCH  /tasks/{task_id}        部分更新
DELETE /tasks/{task_id}        删除
PATCH  /tasks/{task_id}/status 仅更新状态
POST   /tasks/{task_id}/duplicate 复制
GET    /tasks/stats            内部统计视图
GET    /tasks/report           对外报告

写操作成功后均返回完整任务列表。请求/响应字段在边界上使用 camelCase。
"""

from datetime import date, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel
from starlette.responses import JSONResponse
from taskboard.core.exceptions import TaskboardError, TaskNotFoundError
from taskboard.core.models import Task, TaskDraft, TaskPriority, TaskStatus

from ..deps import get_store_group
from ..services.task_service import TaskService

router = APIRouter()

_MAX_ID = 2**63 - 1


class CamelModel(BaseModel):
    """边界模型基类：camelCase 别名，同时接受 snake_case 字段名"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(value):
    # 表单风格客户端以空串表示“无截止日期”
    if value == "":
        return None
    return value


Deadline = Annotated[date | None, BeforeValidator(_blank_to_none)]


class TaskCreateRequest(CamelModel):
    """创建任务请求体"""

    name: str = Field(min_length=1, description="任务名称")
    explanation: str = Field(default="", description="任务说明")
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED, description="状态")
    priority: TaskPriority = Field(default=TaskPriority.LOW, description="优先级")
    genre_id: int = Field(ge=1, le=_MAX_ID, description="所属 Genre ID")
    deadline_date: Deadline = Field(default=None, description="截止日期")

    def to_draft(self) -> TaskDraft:
        return TaskDraft(**self.model_dump())


class TaskUpdateRequest(CamelModel):
    """部分更新请求体 -- 未出现的字段保持不变，deadlineDate 可显式置空"""

    name: str | None = Field(default=None, min_length=1)
    explanation: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    genre_id: int | None = Field(default=None, ge=1, le=_MAX_ID)
    deadline_date: Deadline = None

    @field_validator("name", "explanation", "status", "priority", "genre_id")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict:
        """客户端显式给出的字段（snake_case 列名）"""
        return self.model_dump(exclude_unset=True)


class TaskStatusRequest(BaseModel):
    """状态更新请求体，其余字段忽略"""

    status: TaskStatus


class GenreOut(CamelModel):
    id: int
    name: str


class TaskOut(CamelModel):
    """任务响应项"""

    id: int
    name: str
    explanation: str
    status: TaskStatus
    priority: TaskPriority
    deadline_date: date | None
    genre_id: int
    genre: GenreOut | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.id,
            name=task.name,
            explanation=task.explanation,
            status=task.status,
            priority=task.priority,
            deadline_date=task.deadline_date,
            genre_id=task.genre_id,
            genre=(
                GenreOut(id=task.genre.id, name=task.genre.name)
                if task.genre is not None
                else None
            ),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


def _error_response(exc: TaskboardError) -> JSONResponse:
    """领域异常 -> HTTP 错误响应"""
    status_code = 404 if isinstance(exc, TaskNotFoundError) else 422
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


async def _task_list_response(service: TaskService, status_code: int = 200) -> JSONResponse:
    tasks = await service.list_tasks()
    return JSONResponse(
        status_code=status_code,
        content=[
            TaskOut.from_task(t).model_dump(mode="json", by_alias=True) for t in tasks
        ],
    )


@router.get("/tasks")
async def list_tasks(store_group=Depends(get_store_group)):
    """查询全部任务，按创建顺序"""
    return await _task_list_response(TaskService(store_group))


@router.post("/tasks")
async def create_task(
    body: TaskCreateRequest,
    store_group=Depends(get_store_group),
):
    """创建任务

    - 成功返回 201 + 完整任务列表
    - genreId 不存在返回 422
    """
    service = TaskService(store_group)
    try:
        await service.create_task(body.to_draft())
    except TaskboardError as e:
        return _error_response(e)
    return await _task_list_response(service, status_code=201)


@router.get("/tasks/stats")
async def task_stats(store_group=Depends(get_store_group)):
    """内部统计视图，完成率保留 2 位小数"""
    stats = await TaskService(store_group).get_stats()
    return stats.to_stats_view()


@router.get("/tasks/report")
async def task_report(store_group=Depends(get_store_group)):
    """对外报告，字段固定，完成率保留 1 位小数"""
    stats = await TaskService(store_group).get_stats()
    return stats.to_report()


def _parse_body(model: type[BaseModel], payload: Any) -> BaseModel:
    """在任务查找之后再校验请求体，保证未知 id 先得到 404"""
    try:
        return model.model_validate(payload if payload is not None else {})
    except ValidationError as e:
        errors = [
            {**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)
        ]
        raise RequestValidationError(errors, body=payload) from e


@router.patch("/tasks/{task_id}")
async def update_task(
    task_id: str,
    payload: Any = Body(default=None),
    store_group=Depends(get_store_group),
):
    """部分更新任务

    - 任务不存在返回 404（先于请求体校验）
    - 新 genreId 不存在或字段非法返回 422
    """
    service = TaskService(store_group)
    try:
        # 仅为在请求体校验前返回 404；写入时 service 会在锁内再次确认
        await service.get_task(task_id)
        body = _parse_body(TaskUpdateRequest, payload)
        await service.update_task(task_id, body.changes())
    except TaskboardError as e:
        return _error_response(e)
    return await _task_list_response(service)


@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: str,
    store_group=Depends(get_store_group),
):
    """删除任务，返回剩余任务列表"""
    service = TaskService(store_group)
    try:
        await service.delete_task(task_id)
    except TaskboardError as e:
        return _error_response(e)
    return await _task_list_response(service)


@router.patch("/tasks/{task_id}/status")
async def update_task_status(
    task_id: str,
    payload: Any = Body(default=None),
    store_group=Depends(get_store_group),
):
    """仅更新任务状态，请求体中的其他字段忽略"""
    service = TaskService(store_group)
    try:
        # 仅为在请求体校验前返回 404；写入时 service 会在锁内再次确认
        await service.get_task(task_id)
        body = _parse_body(TaskStatusRequest, payload)
        await service.update_status(task_id, body.status)
    except TaskboardError as e:
        return _error_response(e)
    return await _task_list_response(service)


@router.post("/tasks/{task_id}/duplicate")
async def duplicate_task(
    task_id: str,
    store_group=Depends(get_store_group),
):
    """复制任务

    - 成功返回 200 + 含原任务与副本的完整列表
    - 不存在或非数字 id 返回 404
    """
    service = TaskService(store_group)
    try:
        await service.duplicate_task(task_id)
    except TaskboardError as e:
        return _error_response(e)
    return await _task_list_response(service)
