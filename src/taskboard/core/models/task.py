"""Task Domain Model

每个 Task 必须且只能属于一个 Genre（多对一，不可为空）。
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import TaskPriority, TaskStatus
from .genre import Genre


class TaskDraft(BaseModel):
    """待写入的 Task 字段（不含系统分配的 id 与时间戳）"""

    name: str = Field(min_length=1, description="任务名称")
    explanation: str = Field(default="", description="任务说明")
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED, description="当前状态")
    priority: TaskPriority = Field(default=TaskPriority.LOW, description="优先级")
    deadline_date: date | None = Field(default=None, description="截止日期")
    genre_id: int = Field(description="所属 Genre ID")


class Task(TaskDraft):
    """Task 数据模型

    genre 在列表查询中通过 JOIN 一并加载；单行查询时可能为 None。
    """

    id: int = Field(description="唯一标识，自增整数")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")
    genre: Genre | None = Field(default=None, description="所属 Genre")

    def to_draft(self) -> TaskDraft:
        """取出可写字段"""
        return TaskDraft(
            name=self.name,
            explanation=self.explanation,
            status=self.status,
            priority=self.priority,
            deadline_date=self.deadline_date,
            genre_id=self.genre_id,
        )
