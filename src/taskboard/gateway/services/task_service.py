"""TaskService -- 任务增删改、复制与统计业务逻辑

路径上的 task_id 以原始字符串传入，非数字与不存在的 id 一律视为 TaskNotFoundError。
读写都在 StoreGroup.lock 下执行，写操作通过 in_transaction 提交或回滚，
读不到其他请求尚未提交的行。
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from taskboard.core.config import get_duplicate_suffix
from taskboard.core.exceptions import GenreNotFoundError, TaskNotFoundError
from taskboard.core.models import Task, TaskDraft, TaskStats, TaskStatus
from taskboard.core.store import StoreGroup, in_transaction

log = structlog.get_logger()

# SQLite INTEGER 上限，超出的 id 不可能存在
_MAX_TASK_ID = 2**63 - 1


def parse_task_id(raw_id: str | int) -> int:
    """将路径参数解析为任务 id

    Raises:
        TaskNotFoundError: 非 ASCII 数字字符串（空串、字母、负号等）或超出范围
    """
    if isinstance(raw_id, str):
        if not (raw_id.isascii() and raw_id.isdigit()):
            raise TaskNotFoundError(raw_id)
        task_id = int(raw_id)
    else:
        task_id = raw_id
    if task_id > _MAX_TASK_ID:
        raise TaskNotFoundError(raw_id)
    return task_id


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_tasks(self) -> list[Task]:
        """查询全部任务（含 Genre），按创建顺序"""
        async with self._stores.lock:
            return await self._stores.task_store.list_tasks()

    async def get_task(self, raw_id: str | int) -> Task:
        """查询单个任务，不存在时抛出 TaskNotFoundError"""
        async with self._stores.lock:
            return await self._find_task(raw_id)

    async def _find_task(self, raw_id: str | int) -> Task:
        # 调用方须已持有 lock
        task_id = parse_task_id(raw_id)
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            log.warning("task_not_found", task_id=raw_id)
            raise TaskNotFoundError(raw_id)
        return task

    async def create_task(self, draft: TaskDraft) -> int:
        """创建任务

        Raises:
            GenreNotFoundError: genre_id 不存在
        """
        async with self._stores.lock:
            await self._ensure_genre(draft.genre_id)
            async with in_transaction(self._stores.conn):
                task_id = await self._stores.task_store.create_task(draft, _now())

        log.info(
            "task_created",
            task_id=task_id,
            genre_id=draft.genre_id,
            status=draft.status.value,
            priority=draft.priority.value,
        )
        return task_id

    async def update_task(self, raw_id: str | int, changes: dict[str, Any]) -> None:
        """部分更新任务，changes 仅包含客户端显式给出的字段

        Raises:
            TaskNotFoundError: 任务不存在
            GenreNotFoundError: 新 genre_id 不存在
        """
        async with self._stores.lock:
            task = await self._find_task(raw_id)
            if "genre_id" in changes:
                await self._ensure_genre(changes["genre_id"])
            if changes:
                async with in_transaction(self._stores.conn):
                    await self._stores.task_store.update_task(task.id, changes, _now())

        log.info("task_updated", task_id=task.id, fields=sorted(changes))

    async def update_status(self, raw_id: str | int, status: TaskStatus) -> None:
        """仅更新任务状态"""
        async with self._stores.lock:
            task = await self._find_task(raw_id)
            async with in_transaction(self._stores.conn):
                await self._stores.task_store.update_task_status(task.id, status, _now())

        log.info(
            "task_status_updated",
            task_id=task.id,
            from_status=task.status.value,
            to_status=status.value,
        )

    async def delete_task(self, raw_id: str | int) -> None:
        """物理删除任务"""
        async with self._stores.lock:
            task = await self._find_task(raw_id)
            async with in_transaction(self._stores.conn):
                await self._stores.task_store.delete_task(task.id)

        log.info("task_deleted", task_id=task.id)

    async def duplicate_task(self, raw_id: str | int) -> int:
        """复制任务：名称追加后缀，状态重置，截止日期清空

        Returns:
            新任务 id
        """
        task_id = parse_task_id(raw_id)
        async with self._stores.lock:
            async with in_transaction(self._stores.conn):
                new_id = await self._stores.task_store.duplicate_task(
                    task_id, get_duplicate_suffix(), _now()
                )

        if new_id is None:
            log.warning("task_not_found", task_id=raw_id)
            raise TaskNotFoundError(raw_id)

        log.info("task_duplicated", source_task_id=task_id, task_id=new_id)
        return new_id

    async def get_stats(self) -> TaskStats:
        """汇总统计"""
        async with self._stores.lock:
            return await self._stores.task_store.get_stats()

    async def _ensure_genre(self, genre_id: int) -> None:
        if not await self._stores.genre_store.exists(genre_id):
            log.warning("genre_not_found", genre_id=genre_id)
            raise GenreNotFoundError(genre_id)


def _now() -> datetime:
    return datetime.now(UTC)
