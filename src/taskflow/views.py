"""派生视图计算 -- 纯函数，无副作用

从权威任务集合计算筛选/排序后的视图与统计。
组合筛选顺序固定：搜索 -> 分类 -> 完成状态 -> 优先级排序，
排序总在最后一步，保证最终结果满足优先级排序约定。
"""

from collections.abc import Sequence
from datetime import datetime

from .clock import as_utc, utc_now
from .models.enums import PRIORITY_RANK, TaskFilter
from .models.task import Task, TaskStats


def filter_by_search(tasks: Sequence[Task], term: str) -> Sequence[Task]:
    """按搜索词筛选（不区分大小写）

    匹配标题、描述（存在时）或分类的子串。
    搜索词去除空白后为空时原样返回输入。

    Args:
        tasks: 任务序列
        term: 搜索词

    Returns:
        保持原顺序的匹配任务
    """
    needle = term.strip().lower()
    if not needle:
        return tasks
    return [
        task
        for task in tasks
        if needle in task.title.lower()
        or (task.description is not None and needle in task.description.lower())
        or needle in task.category.lower()
    ]


def filter_by_category(tasks: Sequence[Task], category: str | None) -> Sequence[Task]:
    """按分类精确筛选，category 为 None 时跳过"""
    if category is None:
        return tasks
    return [task for task in tasks if task.category == category]


def filter_by_status(tasks: Sequence[Task], status: TaskFilter) -> Sequence[Task]:
    """按完成状态筛选"""
    if status == TaskFilter.ACTIVE:
        return [task for task in tasks if not task.completed]
    if status == TaskFilter.COMPLETED:
        return [task for task in tasks if task.completed]
    return tasks


def unique_categories(tasks: Sequence[Task]) -> list[str]:
    """去重后按字典序升序返回所有分类"""
    return sorted({task.category for task in tasks})


def sort_by_priority(tasks: Sequence[Task]) -> list[Task]:
    """按优先级稳定排序：urgent < high < medium < low

    同优先级任务保持输入中的相对顺序。
    """
    return sorted(tasks, key=lambda task: PRIORITY_RANK[task.priority])


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """判断任务是否逾期

    有截止时间、未完成，且 now 严格晚于截止时间。
    """
    if task.due_date is None or task.completed:
        return False
    current = as_utc(now) if now is not None else utc_now()
    return current > as_utc(task.due_date)


def completion_rate(completed: int, total: int) -> int:
    """完成率百分比，四舍五入（0.5 向上）；total 为 0 时返回 0"""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def compute_stats(tasks: Sequence[Task], now: datetime | None = None) -> TaskStats:
    """计算任务统计

    Args:
        tasks: 任务序列
        now: 逾期判断基准时间，默认当前 UTC 时间

    Returns:
        TaskStats，满足 active + completed == total
    """
    current = as_utc(now) if now is not None else utc_now()
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    overdue = sum(1 for task in tasks if is_overdue(task, current))
    return TaskStats(
        total=total,
        completed=completed,
        active=total - completed,
        overdue=overdue,
        completion_rate=completion_rate(completed, total),
    )


def apply_filters(
    tasks: Sequence[Task],
    *,
    search_term: str = "",
    category: str | None = None,
    status: TaskFilter = TaskFilter.ALL,
) -> list[Task]:
    """组合筛选流水线

    1. 搜索词筛选
    2. 分类精确筛选（未选择分类时跳过）
    3. 完成状态筛选
    4. 优先级排序
    """
    filtered = filter_by_search(tasks, search_term)
    filtered = filter_by_category(filtered, category)
    filtered = filter_by_status(filtered, status)
    return sort_by_priority(filtered)


def empty_message(total: int, visible: int, status: TaskFilter) -> str | None:
    """视图为空时的提示文案"""
    if visible > 0:
        return None
    if total == 0:
        return "No tasks yet"
    if status == TaskFilter.ALL:
        return "No tasks found"
    return f"No {status.value} tasks found"
