"""GenreService -- 分类查询与创建"""

from datetime import UTC, datetime

import structlog
from taskboard.core.models import Genre
from taskboard.core.store import StoreGroup, in_transaction

log = structlog.get_logger()


class GenreService:
    """分类业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_genres(self) -> list[Genre]:
        async with self._stores.lock:
            return await self._stores.genre_store.list_genres()

    async def create_genre(self, name: str) -> Genre:
        """创建分类"""
        async with self._stores.lock:
            async with in_transaction(self._stores.conn):
                genre = await self._stores.genre_store.create_genre(name, datetime.now(UTC))

        log.info("genre_created", genre_id=genre.id, name=genre.name)
        return genre
