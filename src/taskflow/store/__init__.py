"""TaskFlow Store -- 键值存储传输层

提供工厂函数创建基于 SQLite 的 KeyValueStore。
"""

from pathlib import Path

import aiosqlite

from .kv_store import MemoryKeyValueStore, SqliteKeyValueStore
from .protocols import KeyValueStore
from .sqlite_init import init_db, verify_wal_mode


async def create_kv_store(db_path: str | Path) -> SqliteKeyValueStore:
    """创建 SQLite 键值存储

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        已初始化 schema 的 SqliteKeyValueStore
    """
    # 确保数据库目录存在
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(str(db_path))
    await init_db(conn)
    return SqliteKeyValueStore(conn)


__all__ = [
    "KeyValueStore",
    "SqliteKeyValueStore",
    "MemoryKeyValueStore",
    "create_kv_store",
    "init_db",
    "verify_wal_mode",
]
