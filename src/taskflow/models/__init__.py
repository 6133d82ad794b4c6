"""TaskFlow Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    PRIORITY_RANK,
    TaskFilter,
    TaskPriority,
    Theme,
    ValidationErrorKind,
)
from .state import AppState, TaskView
from .task import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    CreateTaskInput,
    Task,
    TaskStats,
    UpdateTaskInput,
)

__all__ = [
    # 枚举
    "TaskPriority",
    "TaskFilter",
    "Theme",
    "ValidationErrorKind",
    "PRIORITY_RANK",
    # Task
    "Task",
    "CreateTaskInput",
    "UpdateTaskInput",
    "TaskStats",
    "MAX_TITLE_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    # State
    "AppState",
    "TaskView",
]
