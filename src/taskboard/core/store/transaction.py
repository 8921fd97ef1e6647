"""事务封装

Store 方法本身不提交；写操作由调用方包在 in_transaction 中，
成功时提交，任何异常时回滚并重新抛出。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite


@asynccontextmanager
async def in_transaction(conn: aiosqlite.Connection) -> AsyncIterator[aiosqlite.Connection]:
    """在同一连接上原子提交一组写操作

    Args:
        conn: 数据库连接（需在同一连接上操作以保证事务性）

    Raises:
        Exception: 块内异常原样抛出，事务已回滚
    """
    try:
        yield conn
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise
