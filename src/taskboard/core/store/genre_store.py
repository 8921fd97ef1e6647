"""GenreStore SQLite 实现"""

from datetime import datetime

import aiosqlite

from ..models.genre import Genre


class SqliteGenreStore:
    """GenreStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_genre(self, name: str, now: datetime) -> Genre:
        """创建分类记录"""
        cursor = await self._conn.execute(
            "INSERT INTO genres (name, created_at) VALUES (?, ?)",
            (name, now.isoformat()),
        )
        return Genre(id=cursor.lastrowid, name=name, created_at=now)

    async def get_genre(self, genre_id: int) -> Genre | None:
        cursor = await self._conn.execute(
            "SELECT id, name, created_at FROM genres WHERE id = ?",
            (genre_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_genre(row)

    async def exists(self, genre_id: int) -> bool:
        """Genre 是否存在"""
        cursor = await self._conn.execute(
            "SELECT 1 FROM genres WHERE id = ?",
            (genre_id,),
        )
        return await cursor.fetchone() is not None

    async def list_genres(self) -> list[Genre]:
        """查询全部分类，按 id 升序"""
        cursor = await self._conn.execute(
            "SELECT id, name, created_at FROM genres ORDER BY id ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_genre(row) for row in rows]

    @staticmethod
    def _row_to_genre(row: aiosqlite.Row) -> Genre:
        return Genre(
            id=row[0],
            name=row[1],
            created_at=datetime.fromisoformat(row[2]),
        )
