"""TaskStore SQLite 实现

列表与单行查询均 JOIN genres，一次查询带出 Task 与所属 Genre。
所有方法不提交事务，由调用方通过 in_transaction 控制。
"""

from datetime import date, datetime
from enum import StrEnum
from typing import Any

import aiosqlite

from ..models.enums import TaskStatus
from ..models.genre import Genre
from ..models.stats import TaskStats
from ..models.task import Task, TaskDraft

_SELECT_WITH_GENRE = """
SELECT t.id, t.name, t.explanation, t.status, t.priority, t.deadline_date,
       t.genre_id, t.created_at, t.updated_at,
       g.name, g.created_at
FROM tasks AS t
JOIN genres AS g ON g.id = t.genre_id
"""

# update_task 允许写入的列
_UPDATABLE_COLUMNS = (
    "name",
    "explanation",
    "status",
    "priority",
    "deadline_date",
    "genre_id",
)


def _to_db_value(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, StrEnum):
        return value.value
    return value


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(self, draft: TaskDraft, now: datetime) -> int:
        """插入任务记录，返回新 id"""
        cursor = await self._conn.execute(
            """
            INSERT INTO tasks (name, explanation, status, priority, deadline_date,
                               genre_id, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                draft.name,
                draft.explanation,
                draft.status.value,
                draft.priority.value,
                _to_db_value(draft.deadline_date),
                draft.genre_id,
                now.isoformat(),
                now.isoformat(),
            ),
        )
        return cursor.lastrowid

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务（含 Genre）"""
        cursor = await self._conn.execute(
            _SELECT_WITH_GENRE + "WHERE t.id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(self) -> list[Task]:
        """查询全部任务，按 id 升序（即创建顺序）"""
        cursor = await self._conn.execute(_SELECT_WITH_GENRE + "ORDER BY t.id ASC")
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def update_task(
        self,
        task_id: int,
        changes: dict[str, Any],
        now: datetime,
    ) -> bool:
        """部分更新任务，仅写入 changes 中出现的列

        Returns:
            True 如果有行被更新
        """
        unknown = set(changes) - set(_UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"不可更新的列: {sorted(unknown)}")

        columns = [col for col in _UPDATABLE_COLUMNS if col in changes]
        assignments = ", ".join(f"{col} = ?" for col in [*columns, "updated_at"])
        params = [_to_db_value(changes[col]) for col in columns]
        cursor = await self._conn.execute(
            f"UPDATE tasks SET {assignments} WHERE id = ?",
            (*params, now.isoformat(), task_id),
        )
        return cursor.rowcount > 0

    async def update_task_status(
        self,
        task_id: int,
        status: TaskStatus,
        now: datetime,
    ) -> bool:
        """仅更新状态"""
        return await self.update_task(task_id, {"status": status}, now)

    async def delete_task(self, task_id: int) -> bool:
        """物理删除任务

        Returns:
            True 如果有行被删除
        """
        cursor = await self._conn.execute(
            "DELETE FROM tasks WHERE id = ?",
            (task_id,),
        )
        return cursor.rowcount > 0

    async def duplicate_task(
        self,
        task_id: int,
        name_suffix: str,
        now: datetime,
    ) -> int | None:
        """以单条 INSERT ... SELECT 复制任务

        复制 explanation / priority / genre_id，名称追加后缀，
        状态重置为 not_started，截止日期清空。读与写在同一语句内完成。

        Returns:
            新任务 id；源任务不存在时返回 None
        """
        cursor = await self._conn.execute(
            """
            INSERT INTO tasks (name, explanation, status, priority, deadline_date,
                               genre_id, created_at, updated_at)
            SELECT name || ?, explanation, ?, priority, NULL, genre_id, ?, ?
            FROM tasks
            WHERE id = ?
            """,
            (
                name_suffix,
                TaskStatus.NOT_STARTED.value,
                now.isoformat(),
                now.isoformat(),
                task_id,
            ),
        )
        if cursor.rowcount == 0:
            return None
        return cursor.lastrowid

    async def count_by_status(self) -> dict[str, int]:
        """按状态分组计数（无任务的状态不出现在结果中）"""
        cursor = await self._conn.execute(
            "SELECT status, COUNT(*) FROM tasks GROUP BY status"
        )
        rows = await cursor.fetchall()
        return {row[0]: row[1] for row in rows}

    async def get_stats(self) -> TaskStats:
        """汇总统计"""
        return TaskStats.from_counts(await self.count_by_status())

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        deadline = row[5]
        return Task(
            id=row[0],
            name=row[1],
            explanation=row[2],
            status=row[3],
            priority=row[4],
            deadline_date=date.fromisoformat(deadline) if deadline else None,
            genre_id=row[6],
            created_at=datetime.fromisoformat(row[7]),
            updated_at=datetime.fromisoformat(row[8]),
            genre=Genre(
                id=row[6],
                name=row[9],
                created_at=datetime.fromisoformat(row[10]),
            ),
        )
