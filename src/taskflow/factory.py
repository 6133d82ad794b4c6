"""Task 构造与部分更新

create_task 在构造前执行校验，非法输入无法生成 Task。
apply_update 返回新实例，id 与 created_at 永不改变。
"""

from datetime import datetime

from ulid import ULID

from .clock import as_utc, utc_now
from .models.task import CreateTaskInput, Task, UpdateTaskInput
from .validation import validate_create_input, validate_update_input


def generate_id() -> str:
    """生成任务 ID（ULID）"""
    return str(ULID())


def _clean_description(description: str | None) -> str | None:
    # 空描述统一存为 None
    if description is None:
        return None
    return description.strip() or None


def create_task(data: CreateTaskInput, now: datetime | None = None) -> Task:
    """根据输入创建新任务

    Args:
        data: 创建输入
        now: 创建时间，默认当前 UTC 时间

    Returns:
        completed=False、created_at == updated_at 的新 Task

    Raises:
        TaskValidationError: 输入不合法
    """
    validate_create_input(data)
    ts = as_utc(now) if now is not None else utc_now()
    return Task(
        id=generate_id(),
        title=data.title.strip(),
        description=_clean_description(data.description),
        completed=False,
        priority=data.priority,
        category=data.category.strip(),
        created_at=ts,
        updated_at=ts,
        due_date=as_utc(data.due_date) if data.due_date is not None else None,
    )


def apply_update(
    task: Task,
    updates: UpdateTaskInput,
    now: datetime | None = None,
) -> Task:
    """将显式赋值的字段应用到任务上，并刷新 updated_at

    title/priority/category/completed 传入 None 时视为未指定；
    description/due_date 传入 None 表示清空。

    Raises:
        TaskValidationError: 更新字段不合法
    """
    validate_update_input(updates)
    fields_set = updates.model_fields_set
    changes: dict = {}

    if "title" in fields_set and updates.title is not None:
        changes["title"] = updates.title.strip()
    if "description" in fields_set:
        changes["description"] = _clean_description(updates.description)
    if "priority" in fields_set and updates.priority is not None:
        changes["priority"] = updates.priority
    if "category" in fields_set and updates.category is not None:
        changes["category"] = updates.category.strip()
    if "due_date" in fields_set:
        changes["due_date"] = (
            as_utc(updates.due_date) if updates.due_date is not None else None
        )
    if "completed" in fields_set and updates.completed is not None:
        changes["completed"] = updates.completed

    changes["updated_at"] = touch(task, now)
    return task.model_copy(update=changes)


def touch(task: Task, now: datetime | None = None) -> datetime:
    """计算刷新后的 updated_at，保证不早于 created_at"""
    ts = as_utc(now) if now is not None else utc_now()
    return max(ts, as_utc(task.created_at))
