"""键值存储测试

测试内容：
1. SQLite 存储读写/覆盖/删除
2. 关闭后重新打开数据仍在
3. WAL 模式
4. 连接关闭后抛出 PersistenceError
"""

from pathlib import Path

import aiosqlite
import pytest
from taskflow.exceptions import PersistenceError
from taskflow.store import MemoryKeyValueStore, create_kv_store, init_db, verify_wal_mode


class TestSqliteKeyValueStore:
    async def test_get_missing_returns_none(self, sqlite_store):
        """不存在的键返回 None"""
        assert await sqlite_store.get("missing") is None

    async def test_set_and_overwrite(self, sqlite_store):
        """写入后可读取，重复写入覆盖"""
        await sqlite_store.set("k", "v1")
        await sqlite_store.set("k", "v2")
        assert await sqlite_store.get("k") == "v2"

    async def test_delete(self, sqlite_store):
        """删除后读取为 None，重复删除不报错"""
        await sqlite_store.set("k", "v")
        await sqlite_store.delete("k")
        await sqlite_store.delete("k")
        assert await sqlite_store.get("k") is None

    async def test_creates_parent_directory(self, tmp_path: Path):
        """数据库目录不存在时自动创建"""
        db_path = tmp_path / "nested" / "dir" / "kv.db"
        store = await create_kv_store(db_path)
        try:
            assert db_path.parent.is_dir()
        finally:
            await store.close()

    async def test_data_survives_reopen(self, tmp_db_path: Path):
        """关闭 -> 重新打开 -> 数据完整"""
        store = await create_kv_store(tmp_db_path)
        await store.set("taskflow-theme", "dark")
        await store.close()

        reopened = await create_kv_store(tmp_db_path)
        try:
            assert await reopened.get("taskflow-theme") == "dark"
        finally:
            await reopened.close()

    async def test_wal_mode_enabled(self, tmp_db_path: Path):
        """init_db 启用 WAL 模式"""
        tmp_db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(str(tmp_db_path))
        try:
            await init_db(conn)
            assert await verify_wal_mode(conn) is True
        finally:
            await conn.close()

    async def test_closed_connection_raises_persistence_error(self, tmp_db_path: Path):
        """连接关闭后读写抛出 PersistenceError"""
        store = await create_kv_store(tmp_db_path)
        await store.close()
        with pytest.raises(PersistenceError) as exc_info:
            await store.set("k", "v")
        assert exc_info.value.operation == "set"
        assert exc_info.value.key == "k"
        assert exc_info.value.recoverable is True


class TestMemoryKeyValueStore:
    async def test_roundtrip(self):
        """内存存储基本读写"""
        store = MemoryKeyValueStore({"a": "1"})
        assert await store.get("a") == "1"
        await store.set("b", "2")
        await store.delete("a")
        assert store.data == {"b": "2"}
