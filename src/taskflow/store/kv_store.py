"""KeyValueStore 实现

SqliteKeyValueStore：基于 aiosqlite 的 kv 表，每次写入立即提交。
MemoryKeyValueStore：进程内 dict，用于测试和临时会话。
"""

from datetime import UTC, datetime

import aiosqlite

from ..exceptions import PersistenceError


class SqliteKeyValueStore:
    """KeyValueStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get(self, key: str) -> str | None:
        """读取存储槽"""
        try:
            cursor = await self._conn.execute(
                "SELECT value FROM kv WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
        except (aiosqlite.Error, ValueError) as e:
            raise PersistenceError("get", key, e) from e
        if row is None:
            return None
        return row[0]

    async def set(self, key: str, value: str) -> None:
        """写入存储槽并提交"""
        try:
            await self._conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(UTC).isoformat()),
            )
            await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            raise PersistenceError("set", key, e) from e

    async def delete(self, key: str) -> None:
        """删除存储槽"""
        try:
            await self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            raise PersistenceError("delete", key, e) from e

    async def close(self) -> None:
        await self._conn.close()


class MemoryKeyValueStore:
    """KeyValueStore 的内存实现"""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def close(self) -> None:
        return
