"""持久化适配器测试

测试内容：
1. 任务集合往返一致
2. 损坏数据降级为空集合
3. 写入失败不抛出
4. 主题偏好读写与默认值
"""

import json
from datetime import timedelta

import pytest
from helpers import NOW, make_task
from taskflow.controller import TaskFlowController
from taskflow.exceptions import PersistenceError
from taskflow.factory import create_task
from taskflow.models import CreateTaskInput, TaskPriority, Theme
from taskflow.persistence import (
    TASKS_KEY,
    THEME_KEY,
    TaskStorage,
    decode_tasks,
    encode_tasks,
)


class FailingStore:
    """读写都失败的存储"""

    async def get(self, key: str) -> str | None:
        raise PersistenceError("get", key, OSError("disk unavailable"))

    async def set(self, key: str, value: str) -> None:
        raise PersistenceError("set", key, OSError("disk full"))

    async def delete(self, key: str) -> None:
        raise PersistenceError("delete", key, OSError("disk full"))


class TestTaskRoundTrip:
    async def test_roundtrip_preserves_tasks(self, storage):
        """save -> load 得到相等的集合（含时间字段）"""
        tasks = [
            create_task(CreateTaskInput(title="Buy milk", priority="low", category="Shopping")),
            make_task(
                "T2",
                title="Report",
                description="Q1 numbers",
                priority=TaskPriority.URGENT,
                completed=True,
                due_date=NOW + timedelta(days=3, microseconds=123),
            ),
        ]
        assert await storage.save_tasks(tasks) is True
        assert await storage.load_tasks() == tasks

    async def test_roundtrip_over_sqlite(self, sqlite_store):
        """SQLite 存储上的往返"""
        storage = TaskStorage(sqlite_store)
        tasks = [make_task("T1"), make_task("T2", completed=True)]
        await storage.save_tasks(tasks)
        assert await storage.load_tasks() == tasks

    async def test_empty_collection_roundtrip(self, storage):
        """空集合往返"""
        await storage.save_tasks([])
        assert await storage.load_tasks() == []

    async def test_missing_slot_returns_empty(self, storage):
        """存储槽不存在时返回空集合"""
        assert await storage.load_tasks() == []

    def test_layout_uses_camel_case_iso_text(self):
        """存储布局：camelCase 键、ISO 文本时间、省略空可选字段"""
        payload = json.loads(encode_tasks([make_task("T1", due_date=NOW)]))
        assert payload[0]["createdAt"].startswith("2026-03-15T12:00:00")
        assert payload[0]["dueDate"].startswith("2026-03-15T12:00:00")
        assert "description" not in payload[0]

    def test_decodes_js_iso_timestamps(self):
        """可读取 JS Date.toISOString 格式的时间"""
        raw = json.dumps(
            [
                {
                    "id": "0b7f0d3e-5c1a-4f7e-9f55-2f4a1a9e2c11",
                    "title": "Buy milk",
                    "completed": False,
                    "priority": "low",
                    "category": "Shopping",
                    "createdAt": "2026-03-15T12:00:00.000Z",
                    "updatedAt": "2026-03-15T12:00:00.000Z",
                }
            ]
        )
        tasks = decode_tasks(raw)
        assert tasks[0].created_at == NOW
        assert tasks[0].due_date is None


class TestCorruptData:
    @pytest.mark.parametrize(
        "raw",
        [
            "not json at all",
            "{\"tasks\": []}",
            "[{\"id\": \"T1\"}]",
            "[1, 2, 3]",
            "[{\"id\": \"T1\", \"title\": \"t\", \"priority\": \"critical\", "
            "\"category\": \"Work\", \"createdAt\": \"2026-01-01T00:00:00Z\", "
            "\"updatedAt\": \"2026-01-01T00:00:00Z\"}]",
            "[{\"id\": \"T1\", \"title\": \"t\", \"priority\": \"low\", "
            "\"category\": \"Work\", \"createdAt\": \"yesterday\", "
            "\"updatedAt\": \"2026-01-01T00:00:00Z\"}]",
            "[" * 200000,
            "[{\"id\": \"T1\", \"title\": \"   \", \"priority\": \"low\", "
            "\"category\": \"Work\", \"createdAt\": \"2026-01-01T00:00:00Z\", "
            "\"updatedAt\": \"2026-01-01T00:00:00Z\"}]",
            "[{\"id\": \"T1\", \"title\": \"t\", \"priority\": \"low\", "
            "\"category\": \" \", \"createdAt\": \"2026-01-01T00:00:00Z\", "
            "\"updatedAt\": \"2026-01-01T00:00:00Z\"}]",
            "[{\"id\": \"T1\", \"title\": \"t\", \"priority\": \"low\", "
            "\"category\": \"Work\", \"createdAt\": \"2026-01-02T00:00:00Z\", "
            "\"updatedAt\": \"2026-01-01T00:00:00Z\"}]",
        ],
        ids=[
            "not-json",
            "object",
            "missing-fields",
            "not-objects",
            "unknown-priority",
            "bad-timestamp",
            "deep-nesting",
            "blank-title",
            "blank-category",
            "updated-before-created",
        ],
    )
    async def test_corrupt_data_yields_empty(self, memory_store, storage, raw):
        """损坏数据返回空集合，不抛出"""
        memory_store.data[TASKS_KEY] = raw
        assert await storage.load_tasks() == []

    async def test_duplicate_ids_rejected(self, memory_store, storage):
        """重复 id 视为损坏数据"""
        memory_store.data[TASKS_KEY] = encode_tasks([make_task("T1"), make_task("T1")])
        assert await storage.load_tasks() == []

    def test_decode_raises_value_error(self):
        """decode_tasks 对损坏数据抛出 ValueError"""
        with pytest.raises(ValueError):
            decode_tasks("[")

    def test_decode_deep_nesting_raises_value_error(self):
        """过深嵌套同样转换为 ValueError"""
        with pytest.raises(ValueError, match="nesting"):
            decode_tasks("[" * 200000)

    async def test_blank_title_and_reversed_timestamps_rejected(self, memory_store, storage):
        """空白标题与 updatedAt 早于 createdAt 的数据视为损坏"""
        payload = json.loads(encode_tasks([make_task("T1")]))
        payload[0]["title"] = "   "
        payload[0]["updatedAt"] = (NOW - timedelta(days=1)).isoformat()
        memory_store.data[TASKS_KEY] = json.dumps(payload)
        assert await storage.load_tasks() == []

    async def test_controller_load_survives_deep_nesting(self, memory_store):
        """控制器加载过深嵌套数据时以空集合启动"""
        memory_store.data[TASKS_KEY] = "[" * 200000
        ctrl = TaskFlowController(TaskStorage(memory_store))
        await ctrl.load()
        assert ctrl.tasks == ()


class TestFailures:
    async def test_save_failure_returns_false(self):
        """写入失败返回 False，不抛出"""
        storage = TaskStorage(FailingStore())
        assert await storage.save_tasks([make_task("T1")]) is False
        assert await storage.save_theme(Theme.DARK) is False

    async def test_load_failure_returns_defaults(self):
        """读取失败返回默认值"""
        storage = TaskStorage(FailingStore())
        assert await storage.load_tasks() == []
        assert await storage.load_theme() == Theme.LIGHT


class TestTheme:
    async def test_default_is_light(self, storage):
        """未保存时为 light"""
        assert await storage.load_theme() == Theme.LIGHT

    async def test_roundtrip(self, memory_store, storage):
        """保存为字面量字符串"""
        await storage.save_theme(Theme.DARK)
        assert memory_store.data[THEME_KEY] == "dark"
        assert await storage.load_theme() == Theme.DARK

    async def test_unrecognized_value_falls_back(self, memory_store, storage):
        """无法识别的值回退为 light"""
        memory_store.data[THEME_KEY] = "solarized"
        assert await storage.load_theme() == Theme.LIGHT
