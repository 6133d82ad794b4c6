"""Store Protocol 接口定义

键值存储是持久化的传输层：TaskStorage 只依赖 get/set/delete 三个操作，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """键值存储接口

    实现在读写失败时抛出 PersistenceError。
    """

    async def get(self, key: str) -> str | None:
        """读取存储槽，不存在时返回 None"""
        ...

    async def set(self, key: str, value: str) -> None:
        """写入存储槽（覆盖）"""
        ...

    async def delete(self, key: str) -> None:
        """删除存储槽，不存在时忽略"""
        ...
