"""TaskFlowController -- 应用状态控制器

独占持有权威任务集合，是唯一的变更入口：
1. load() 在会话开始时从存储恢复任务与主题
2. 每个成功的变更操作最后一步调用 TaskStorage.save_tasks
3. 派生视图在访问时按当前筛选条件重新计算，从不存储

所有操作由同一把 asyncio.Lock 串行化，一个操作完整结束后下一个才开始。
"""

import asyncio
from collections.abc import Sequence
from datetime import datetime

import structlog

from .config import DEFAULT_CATEGORIES
from .factory import apply_update, create_task, touch
from .models.enums import TaskFilter, Theme
from .models.state import AppState, TaskView
from .models.task import CreateTaskInput, Task, TaskStats, UpdateTaskInput
from .persistence import TaskStorage
from .views import apply_filters, compute_stats, empty_message, unique_categories

log = structlog.get_logger()


class TaskFlowController:
    """任务状态控制器"""

    def __init__(
        self,
        storage: TaskStorage,
        default_categories: Sequence[str] = DEFAULT_CATEGORIES,
    ) -> None:
        self._storage = storage
        self._state = AppState()
        self._default_categories = tuple(default_categories)
        self._lock = asyncio.Lock()

    # ---- 生命周期 ----

    async def load(self) -> None:
        """从存储恢复任务集合与主题（每个会话调用一次）"""
        async with self._lock:
            self._state.tasks = await self._storage.load_tasks()
            self._state.theme = await self._storage.load_theme()
            log.info(
                "state_loaded",
                task_count=len(self._state.tasks),
                theme=self._state.theme.value,
            )

    # ---- 只读投影 ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        """权威集合的只读副本（插入顺序）"""
        return tuple(self._state.tasks)

    @property
    def filter(self) -> TaskFilter:
        return self._state.filter

    @property
    def search_term(self) -> str:
        return self._state.search_term

    @property
    def selected_category(self) -> str | None:
        return self._state.selected_category

    @property
    def theme(self) -> Theme:
        return self._state.theme

    def get(self, task_id: str) -> Task | None:
        """根据 id 查询任务"""
        index = self._index_of(task_id)
        return None if index is None else self._state.tasks[index]

    def categories(self) -> list[str]:
        """全部任务的分类（去重、升序）"""
        return unique_categories(self._state.tasks)

    def category_choices(self) -> list[str]:
        """可选分类：没有任务分类时使用默认分类"""
        return self.categories() or list(self._default_categories)

    def default_category(self) -> str:
        return self.category_choices()[0]

    def stats(self, now: datetime | None = None) -> TaskStats:
        """全部任务的统计"""
        return compute_stats(self._state.tasks, now)

    def visible_tasks(self) -> list[Task]:
        """按当前筛选条件计算的派生任务列表"""
        return apply_filters(
            self._state.tasks,
            search_term=self._state.search_term,
            category=self._state.selected_category,
            status=self._state.filter,
        )

    def view(self, now: datetime | None = None) -> TaskView:
        """派生视图快照"""
        visible = self.visible_tasks()
        return TaskView(
            tasks=tuple(visible),
            categories=tuple(self.categories()),
            stats=self.stats(now),
            filter=self._state.filter,
            search_term=self._state.search_term,
            selected_category=self._state.selected_category,
            theme=self._state.theme,
            empty_message=empty_message(
                len(self._state.tasks), len(visible), self._state.filter
            ),
        )

    # ---- 变更操作 ----

    async def create(self, data: CreateTaskInput, now: datetime | None = None) -> Task:
        """创建任务并追加到集合末尾

        Raises:
            TaskValidationError: 输入不合法（集合不变）
        """
        async with self._lock:
            task = create_task(data, now)
            self._state.tasks = [*self._state.tasks, task]
            log.info(
                "task_created",
                task_id=task.id,
                priority=task.priority.value,
                category=task.category,
            )
            await self._persist()
            return task

    async def toggle_complete(
        self, task_id: str, now: datetime | None = None
    ) -> Task | None:
        """切换完成状态

        Returns:
            更新后的 Task，如果任务不存在返回 None
        """
        async with self._lock:
            index = self._index_of(task_id)
            if index is None:
                log.warning("task_not_found", task_id=task_id, operation="toggle_complete")
                return None
            task = self._state.tasks[index]
            updated = task.model_copy(
                update={"completed": not task.completed, "updated_at": touch(task, now)}
            )
            self._replace(index, updated)
            log.info("task_toggled", task_id=task_id, completed=updated.completed)
            await self._persist()
            return updated

    async def edit(
        self,
        task_id: str,
        updates: UpdateTaskInput,
        now: datetime | None = None,
    ) -> Task | None:
        """部分更新任务字段，未指定的字段保持不变

        Returns:
            更新后的 Task，如果任务不存在返回 None

        Raises:
            TaskValidationError: 更新字段不合法（集合不变）
        """
        async with self._lock:
            index = self._index_of(task_id)
            if index is None:
                log.warning("task_not_found", task_id=task_id, operation="edit")
                return None
            updated = apply_update(self._state.tasks[index], updates, now)
            self._replace(index, updated)
            log.info(
                "task_edited",
                task_id=task_id,
                fields=sorted(updates.model_fields_set),
            )
            await self._persist()
            return updated

    async def delete(self, task_id: str) -> bool:
        """删除任务

        Returns:
            True 已删除；False 任务不存在
        """
        async with self._lock:
            index = self._index_of(task_id)
            if index is None:
                log.warning("task_not_found", task_id=task_id, operation="delete")
                return False
            tasks = list(self._state.tasks)
            del tasks[index]
            self._state.tasks = tasks
            log.info("task_deleted", task_id=task_id)
            await self._persist()
            return True

    async def clear_completed(self) -> int:
        """移除所有已完成任务

        Returns:
            移除的任务数
        """
        async with self._lock:
            remaining = [task for task in self._state.tasks if not task.completed]
            removed = len(self._state.tasks) - len(remaining)
            if removed == 0:
                return 0
            self._state.tasks = remaining
            log.info("completed_tasks_cleared", removed=removed)
            await self._persist()
            return removed

    # ---- 筛选条件与主题 ----

    def set_filter(self, value: TaskFilter | str) -> None:
        """设置完成状态筛选

        Raises:
            ValueError: 未知的筛选值
        """
        self._state.filter = TaskFilter(value)

    def set_search_term(self, term: str) -> None:
        self._state.search_term = term

    def set_selected_category(self, category: str | None) -> None:
        self._state.selected_category = category

    async def set_theme(self, theme: Theme | str) -> None:
        """设置主题并持久化

        Raises:
            ValueError: 未知的主题值
        """
        value = Theme(theme)
        async with self._lock:
            self._state.theme = value
            await self._storage.save_theme(value)

    # ---- 内部 ----

    def _index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._state.tasks):
            if task.id == task_id:
                return index
        return None

    def _replace(self, index: int, task: Task) -> None:
        tasks = list(self._state.tasks)
        tasks[index] = task
        self._state.tasks = tasks

    async def _persist(self) -> None:
        saved = await self._storage.save_tasks(self._state.tasks)
        if not saved:
            log.warning("mutation_not_persisted", task_count=len(self._state.tasks))
