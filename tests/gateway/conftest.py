"""gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def test_app(tmp_db_path: Path, store_group):
    """创建测试用 FastAPI app 实例（绕过 lifespan，手动注入 StoreGroup）"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_db_path)

    from taskboard.gateway.main import create_app

    app = create_app()
    app.state.store_group = store_group

    yield app

    os.environ.pop("TASKBOARD_DB_PATH", None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
