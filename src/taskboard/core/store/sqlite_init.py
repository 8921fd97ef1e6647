"""SQLite 数据库初始化

PRAGMA 配置 + 两张表 DDL + 索引创建。
使用 aiosqlite 异步操作，DDL 可重复执行。
"""

import aiosqlite

from ..models.enums import TaskPriority, TaskStatus, sql_check_values

# genres 表 DDL
_GENRES_DDL = """
CREATE TABLE IF NOT EXISTS genres (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL CHECK (name <> ''),
    created_at  TEXT NOT NULL
);
"""

# tasks 表 DDL（status / priority 以 CHECK 约束限定为封闭枚举）
_TASKS_DDL = f"""
CREATE TABLE IF NOT EXISTS tasks (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    name           TEXT NOT NULL CHECK (name <> ''),
    explanation    TEXT NOT NULL DEFAULT '',
    status         TEXT NOT NULL DEFAULT '{TaskStatus.NOT_STARTED.value}'
                   CHECK (status IN ({sql_check_values(TaskStatus)})),
    priority       TEXT NOT NULL DEFAULT '{TaskPriority.LOW.value}'
                   CHECK (priority IN ({sql_check_values(TaskPriority)})),
    deadline_date  TEXT,
    genre_id       INTEGER NOT NULL,
    created_at     TEXT NOT NULL,
    updated_at     TEXT NOT NULL,

    FOREIGN KEY (genre_id) REFERENCES genres(id) ON DELETE RESTRICT
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_genre_id ON tasks(genre_id);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表（genres 需先于 tasks）
    await conn.execute(_GENRES_DDL)
    await conn.execute(_TASKS_DDL)

    for idx_sql in _TASKS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
