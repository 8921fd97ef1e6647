"""Taskboard Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

import asyncio
from pathlib import Path

import aiosqlite

from .genre_store import SqliteGenreStore
from .protocols import GenreStore, TaskStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .transaction import in_transaction


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        # 共享连接上的读写串行化：不同请求的语句不落入同一事务，读也看不到未提交的写
        self.lock = asyncio.Lock()
        self.task_store: TaskStore = SqliteTaskStore(conn)
        self.genre_store: GenreStore = SqliteGenreStore(conn)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteTaskStore",
    "SqliteGenreStore",
    "TaskStore",
    "GenreStore",
    "init_db",
    "in_transaction",
]
