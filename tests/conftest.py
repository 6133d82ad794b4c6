"""测试配置 -- 临时 SQLite 数据库 + 内存存储 + 控制器 fixture"""

from collections.abc import AsyncGenerator
from datetime import datetime
from pathlib import Path

import pytest
import pytest_asyncio
from helpers import NOW
from taskflow.controller import TaskFlowController
from taskflow.persistence import TaskStorage
from taskflow.store import MemoryKeyValueStore, SqliteKeyValueStore, create_kv_store


@pytest.fixture
def now() -> datetime:
    """固定的基准时间"""
    return NOW


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def storage(memory_store: MemoryKeyValueStore) -> TaskStorage:
    return TaskStorage(memory_store)


@pytest_asyncio.fixture
async def controller(storage: TaskStorage) -> TaskFlowController:
    """已完成 load() 的空控制器（内存存储）"""
    ctrl = TaskFlowController(storage)
    await ctrl.load()
    return ctrl


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "taskflow.db"


@pytest_asyncio.fixture
async def sqlite_store(tmp_db_path: Path) -> AsyncGenerator[SqliteKeyValueStore, None]:
    """已初始化的临时 SQLite 键值存储"""
    store = await create_kv_store(tmp_db_path)
    yield store
    await store.close()
