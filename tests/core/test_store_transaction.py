"""事务封装与数据库初始化测试

测试内容：
1. in_transaction 成功时提交
2. in_transaction 异常时回滚并重新抛出
3. init_db 可重复执行、启用 WAL
"""

from datetime import UTC, datetime
from pathlib import Path

import aiosqlite
import pytest
from taskboard.core.store import in_transaction
from taskboard.core.store.sqlite_init import init_db, verify_wal_mode


class TestInTransaction:
    """in_transaction"""

    async def test_commit_on_success(self, store_group, tmp_db_path: Path):
        async with in_transaction(store_group.conn):
            await store_group.genre_store.create_genre("仕事", datetime.now(UTC))

        # 另开连接验证已落盘
        async with aiosqlite.connect(str(tmp_db_path)) as other:
            cursor = await other.execute("SELECT COUNT(*) FROM genres")
            row = await cursor.fetchone()
        assert row[0] == 1

    async def test_rollback_on_error(self, store_group):
        with pytest.raises(RuntimeError):
            async with in_transaction(store_group.conn):
                await store_group.genre_store.create_genre("消える", datetime.now(UTC))
                raise RuntimeError("boom")

        assert await store_group.genre_store.list_genres() == []


class TestInitDb:
    """init_db"""

    async def test_init_is_idempotent(self, db_conn: aiosqlite.Connection):
        await init_db(db_conn)
        cursor = await db_conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name IN ('tasks', 'genres')"
        )
        rows = await cursor.fetchall()
        assert sorted(r[0] for r in rows) == ["genres", "tasks"]

    async def test_wal_mode_enabled(self, db_conn: aiosqlite.Connection):
        assert await verify_wal_mode(db_conn) is True

    async def test_foreign_keys_enabled(self, db_conn: aiosqlite.Connection):
        cursor = await db_conn.execute("PRAGMA foreign_keys;")
        row = await cursor.fetchone()
        assert row[0] == 1
