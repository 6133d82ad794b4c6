"""测试辅助构造函数"""

from datetime import UTC, datetime

from taskflow.models import Task, TaskPriority

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def make_task(
    task_id: str,
    *,
    title: str = "Task",
    priority: TaskPriority = TaskPriority.MEDIUM,
    category: str = "Work",
    completed: bool = False,
    description: str | None = None,
    due_date: datetime | None = None,
    created_at: datetime = NOW,
) -> Task:
    """构造测试用 Task"""
    return Task(
        id=task_id,
        title=title,
        description=description,
        completed=completed,
        priority=priority,
        category=category,
        created_at=created_at,
        updated_at=created_at,
        due_date=due_date,
    )
