"""CLI 入口模块 -- python -m taskboard.core <command>

支持的命令：
  init-db              在配置的路径上创建数据库表
  add-genre <name>     新建分类并输出其 id
  stats                输出任务统计报告（JSON）
"""

import asyncio
import json
import sys
from datetime import UTC, datetime

from .config import get_db_path

_USAGE = """用法: python -m taskboard.core <command>
命令:
  init-db              在配置的路径上创建数据库表
  add-genre <name>     新建分类并输出其 id
  stats                输出任务统计报告（JSON）"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "add-genre":
        if len(sys.argv) < 3 or not sys.argv[2]:
            print("用法: python -m taskboard.core add-genre <name>")
            sys.exit(1)
        asyncio.run(add_genre(sys.argv[2]))
    elif command == "stats":
        asyncio.run(print_stats())
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, add-genre, stats")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库表（可重复执行）"""
    from .store import create_store_group

    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print(f"数据库已初始化: {db_path}")


async def add_genre(name: str) -> None:
    """新建分类"""
    from .store import create_store_group, in_transaction

    store_group = await create_store_group(get_db_path())
    try:
        async with in_transaction(store_group.conn):
            genre = await store_group.genre_store.create_genre(name, datetime.now(UTC))
        print(genre.id)
    finally:
        await store_group.conn.close()


async def print_stats() -> None:
    """输出对外报告格式的统计"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        stats = await store_group.task_store.get_stats()
        print(json.dumps(stats.to_report(), ensure_ascii=False))
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
