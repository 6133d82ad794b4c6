"""持久化适配器 -- 任务集合与主题偏好的序列化/反序列化

两个独立存储槽：
- taskflow-tasks: Task 的 JSON 数组，时间字段为 ISO-8601 文本
- taskflow-theme: "light" 或 "dark"

所有失败都在此处记录日志并降级：写入失败返回 False（变更仅存在于内存），
读取失败或数据损坏返回默认值（空集合 / light），从不向调用方抛出。
"""

import json
from collections.abc import Sequence

import structlog
from pydantic import TypeAdapter, ValidationError

from .exceptions import PersistenceError
from .models.enums import Theme
from .models.task import Task
from .store.protocols import KeyValueStore

log = structlog.get_logger()

TASKS_KEY = "taskflow-tasks"
THEME_KEY = "taskflow-theme"

_TASK_LIST = TypeAdapter(list[Task])


def encode_tasks(tasks: Sequence[Task]) -> str:
    """序列化任务集合（camelCase 键，省略空的可选字段）"""
    return _TASK_LIST.dump_json(list(tasks), by_alias=True, exclude_none=True).decode()


def decode_tasks(raw: str) -> list[Task]:
    """显式解码步骤：校验 JSON 结构并还原时间字段

    Raises:
        ValueError: JSON 非法、结构不符或存在重复 id
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e.msg}") from e
    except RecursionError as e:
        raise ValueError("invalid JSON: nesting too deep") from e
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    try:
        tasks = _TASK_LIST.validate_python(data)
    except ValidationError as e:
        raise ValueError(f"invalid task data: {e.error_count()} errors") from e

    seen: set[str] = set()
    for task in tasks:
        if task.id in seen:
            raise ValueError(f"duplicate task id: {task.id}")
        seen.add(task.id)
    return tasks


class TaskStorage:
    """任务与主题偏好的持久化适配器"""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def save_tasks(self, tasks: Sequence[Task]) -> bool:
        """写入完整任务集合

        Returns:
            True 写入成功；False 写入失败（已记录日志）
        """
        try:
            payload = encode_tasks(tasks)
            await self._store.set(TASKS_KEY, payload)
        except (PersistenceError, ValueError, TypeError) as e:
            log.error(
                "tasks_save_failed",
                key=TASKS_KEY,
                task_count=len(tasks),
                error_type=type(e).__name__,
                error=str(e),
            )
            return False
        log.debug("tasks_saved", key=TASKS_KEY, task_count=len(tasks))
        return True

    async def load_tasks(self) -> list[Task]:
        """读取任务集合；不存在、不可读或已损坏时返回空列表"""
        try:
            raw = await self._store.get(TASKS_KEY)
        except PersistenceError as e:
            log.error(
                "tasks_load_failed",
                key=TASKS_KEY,
                error_type=type(e).__name__,
                error=str(e),
            )
            return []

        if raw is None:
            return []

        try:
            tasks = decode_tasks(raw)
        except ValueError as e:
            # 损坏数据直接丢弃，会话以空集合继续
            log.warning("tasks_load_corrupt", key=TASKS_KEY, error=str(e))
            return []

        log.info("tasks_loaded", key=TASKS_KEY, task_count=len(tasks))
        return tasks

    async def save_theme(self, theme: Theme) -> bool:
        """写入主题偏好"""
        try:
            await self._store.set(THEME_KEY, Theme(theme).value)
        except (PersistenceError, ValueError) as e:
            log.error(
                "theme_save_failed",
                key=THEME_KEY,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False
        return True

    async def load_theme(self) -> Theme:
        """读取主题偏好；缺失、无法识别或读取失败时返回 light"""
        try:
            raw = await self._store.get(THEME_KEY)
        except PersistenceError as e:
            log.error(
                "theme_load_failed",
                key=THEME_KEY,
                error_type=type(e).__name__,
                error=str(e),
            )
            return Theme.LIGHT

        if raw in (Theme.LIGHT.value, Theme.DARK.value):
            return Theme(raw)
        if raw is not None:
            log.warning("theme_unrecognized", key=THEME_KEY, value=raw)
        return Theme.LIGHT
