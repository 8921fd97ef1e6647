"""Store Protocol 接口定义

定义 TaskStore、GenreStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from datetime import datetime
from typing import Any, Protocol

from ..models.enums import TaskStatus
from ..models.genre import Genre
from ..models.stats import TaskStats
from ..models.task import Task, TaskDraft


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, draft: TaskDraft, now: datetime) -> int:
        """创建任务记录，返回新 id"""
        ...

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        ...

    async def list_tasks(self) -> list[Task]:
        """查询全部任务（含 Genre），按创建顺序"""
        ...

    async def update_task(
        self,
        task_id: int,
        changes: dict[str, Any],
        now: datetime,
    ) -> bool:
        """部分更新任务"""
        ...

    async def update_task_status(
        self,
        task_id: int,
        status: TaskStatus,
        now: datetime,
    ) -> bool:
        """仅更新状态"""
        ...

    async def delete_task(self, task_id: int) -> bool:
        """删除任务"""
        ...

    async def duplicate_task(
        self,
        task_id: int,
        name_suffix: str,
        now: datetime,
    ) -> int | None:
        """复制任务，返回新 id 或 None"""
        ...

    async def get_stats(self) -> TaskStats:
        """汇总统计"""
        ...


class GenreStore(Protocol):
    """Genre 存储接口"""

    async def create_genre(self, name: str, now: datetime) -> Genre:
        """创建分类"""
        ...

    async def get_genre(self, genre_id: int) -> Genre | None:
        """根据 id 查询分类"""
        ...

    async def exists(self, genre_id: int) -> bool:
        """分类是否存在"""
        ...

    async def list_genres(self) -> list[Genre]:
        """查询全部分类"""
        ...
