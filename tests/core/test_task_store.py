"""TaskStore / GenreStore 单元测试

测试内容：
1. 创建、查询（含 Genre JOIN）、列表顺序
2. 部分更新、状态更新、删除
3. 复制：字段复制、状态重置、截止日期清空、源行不变
4. 按状态分组计数
5. 存储边界约束：CHECK 与外键
"""

from datetime import UTC, date, datetime

import aiosqlite
import pytest
from taskboard.core.models import TaskDraft, TaskPriority, TaskStatus


def _draft(genre_id: int, **kwargs) -> TaskDraft:
    fields = {"name": "Task", "explanation": "説明", "genre_id": genre_id}
    fields.update(kwargs)
    return TaskDraft(**fields)


async def _insert(store_group, draft: TaskDraft) -> int:
    task_id = await store_group.task_store.create_task(draft, datetime.now(UTC))
    await store_group.conn.commit()
    return task_id


class TestCreateAndQuery:
    """创建与查询"""

    async def test_create_and_get(self, store_group, genre_id):
        task_id = await _insert(
            store_group,
            _draft(
                genre_id,
                name="New Task",
                priority=TaskPriority.HIGH,
                deadline_date=date(2025, 12, 31),
            ),
        )

        task = await store_group.task_store.get_task(task_id)
        assert task is not None
        assert task.id == task_id
        assert task.name == "New Task"
        assert task.priority == TaskPriority.HIGH
        assert task.status == TaskStatus.NOT_STARTED
        assert task.deadline_date == date(2025, 12, 31)
        assert task.genre is not None
        assert task.genre.id == genre_id
        assert task.genre.name == "仕事"

    async def test_get_missing_returns_none(self, store_group):
        assert await store_group.task_store.get_task(99999) is None

    async def test_list_in_creation_order(self, store_group, genre_id):
        ids = [
            await _insert(store_group, _draft(genre_id, name=f"T{i}"))
            for i in range(3)
        ]
        tasks = await store_group.task_store.list_tasks()
        assert [t.id for t in tasks] == ids
        assert all(t.genre is not None and t.genre.name == "仕事" for t in tasks)

    async def test_list_empty(self, store_group):
        assert await store_group.task_store.list_tasks() == []


class TestUpdateAndDelete:
    """更新与删除"""

    async def test_partial_update_keeps_other_fields(self, store_group, genre_id):
        task_id = await _insert(
            store_group,
            _draft(genre_id, name="Before", deadline_date=date(2025, 1, 1)),
        )

        updated = await store_group.task_store.update_task(
            task_id, {"name": "After"}, datetime.now(UTC)
        )
        await store_group.conn.commit()
        assert updated is True

        task = await store_group.task_store.get_task(task_id)
        assert task.name == "After"
        assert task.explanation == "説明"
        assert task.deadline_date == date(2025, 1, 1)

    async def test_update_clears_deadline(self, store_group, genre_id):
        task_id = await _insert(
            store_group, _draft(genre_id, deadline_date=date(2025, 1, 1))
        )
        await store_group.task_store.update_task(
            task_id, {"deadline_date": None}, datetime.now(UTC)
        )
        await store_group.conn.commit()

        task = await store_group.task_store.get_task(task_id)
        assert task.deadline_date is None

    async def test_update_rejects_unknown_column(self, store_group, genre_id):
        task_id = await _insert(store_group, _draft(genre_id))
        with pytest.raises(ValueError):
            await store_group.task_store.update_task(
                task_id, {"id": 5}, datetime.now(UTC)
            )

    async def test_update_missing_returns_false(self, store_group):
        updated = await store_group.task_store.update_task(
            404, {"name": "x"}, datetime.now(UTC)
        )
        assert updated is False

    async def test_update_status_only(self, store_group, genre_id):
        task_id = await _insert(store_group, _draft(genre_id, name="Keep"))
        await store_group.task_store.update_task_status(
            task_id, TaskStatus.COMPLETED, datetime.now(UTC)
        )
        await store_group.conn.commit()

        task = await store_group.task_store.get_task(task_id)
        assert task.status == TaskStatus.COMPLETED
        assert task.name == "Keep"

    async def test_delete(self, store_group, genre_id):
        task_id = await _insert(store_group, _draft(genre_id))
        assert await store_group.task_store.delete_task(task_id) is True
        await store_group.conn.commit()

        assert await store_group.task_store.get_task(task_id) is None
        assert await store_group.task_store.delete_task(task_id) is False


class TestDuplicate:
    """复制"""

    async def test_duplicate_copies_core_fields(self, store_group, genre_id):
        source_id = await _insert(
            store_group,
            _draft(
                genre_id,
                name="Original Task",
                explanation="Original explanation",
                status=TaskStatus.IN_PROGRESS,
                priority=TaskPriority.HIGH,
                deadline_date=date(2025, 12, 31),
            ),
        )

        new_id = await store_group.task_store.duplicate_task(
            source_id, "(コピー)", datetime.now(UTC)
        )
        await store_group.conn.commit()
        assert new_id is not None
        assert new_id != source_id

        clone = await store_group.task_store.get_task(new_id)
        assert clone.name == "Original Task(コピー)"
        assert clone.explanation == "Original explanation"
        assert clone.priority == TaskPriority.HIGH
        assert clone.genre_id == genre_id
        assert clone.status == TaskStatus.NOT_STARTED
        assert clone.deadline_date is None

        source = await store_group.task_store.get_task(source_id)
        assert source.name == "Original Task"
        assert source.status == TaskStatus.IN_PROGRESS
        assert source.deadline_date == date(2025, 12, 31)

    async def test_duplicate_missing_returns_none(self, store_group, genre_id):
        await _insert(store_group, _draft(genre_id))
        new_id = await store_group.task_store.duplicate_task(
            99999, "(コピー)", datetime.now(UTC)
        )
        assert new_id is None
        assert len(await store_group.task_store.list_tasks()) == 1


class TestCountByStatus:
    """按状态计数"""

    async def test_group_counts(self, store_group, genre_id):
        for status in (
            TaskStatus.NOT_STARTED,
            TaskStatus.IN_PROGRESS,
            TaskStatus.COMPLETED,
            TaskStatus.COMPLETED,
        ):
            await _insert(store_group, _draft(genre_id, status=status))

        counts = await store_group.task_store.count_by_status()
        assert counts == {"not_started": 1, "in_progress": 1, "completed": 2}

        stats = await store_group.task_store.get_stats()
        assert stats.total_count == 4
        assert stats.completion_rate(1) == 50.0

    async def test_stats_on_empty_table(self, store_group):
        stats = await store_group.task_store.get_stats()
        assert stats.total_count == 0
        assert stats.completion_rate() == 0.0


class TestStorageConstraints:
    """存储边界约束"""

    async def test_invalid_status_rejected_by_check(self, db_conn: aiosqlite.Connection):
        now = datetime.now(UTC).isoformat()
        await db_conn.execute(
            "INSERT INTO genres (name, created_at) VALUES (?, ?)", ("g", now)
        )
        with pytest.raises(aiosqlite.IntegrityError):
            await db_conn.execute(
                """
                INSERT INTO tasks (name, status, priority, genre_id, created_at, updated_at)
                VALUES ('x', 'done', 'low', 1, ?, ?)
                """,
                (now, now),
            )

    async def test_invalid_priority_rejected_by_check(self, db_conn: aiosqlite.Connection):
        now = datetime.now(UTC).isoformat()
        await db_conn.execute(
            "INSERT INTO genres (name, created_at) VALUES (?, ?)", ("g", now)
        )
        with pytest.raises(aiosqlite.IntegrityError):
            await db_conn.execute(
                """
                INSERT INTO tasks (name, priority, genre_id, created_at, updated_at)
                VALUES ('x', 'urgent', 1, ?, ?)
                """,
                (now, now),
            )

    async def test_missing_genre_rejected_by_foreign_key(self, store_group):
        with pytest.raises(aiosqlite.IntegrityError):
            await store_group.task_store.create_task(
                _draft(12345), datetime.now(UTC)
            )


class TestGenreStore:
    """GenreStore"""

    async def test_create_list_exists(self, store_group):
        now = datetime.now(UTC)
        first = await store_group.genre_store.create_genre("仕事", now)
        second = await store_group.genre_store.create_genre("趣味", now)
        await store_group.conn.commit()

        genres = await store_group.genre_store.list_genres()
        assert [g.name for g in genres] == ["仕事", "趣味"]
        assert await store_group.genre_store.exists(second.id) is True
        assert await store_group.genre_store.exists(999) is False

        fetched = await store_group.genre_store.get_genre(first.id)
        assert fetched is not None
        assert fetched.name == "仕事"
        assert await store_group.genre_store.get_genre(999) is None
