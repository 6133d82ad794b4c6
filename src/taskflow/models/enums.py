"""枚举定义

包含 TaskPriority、TaskFilter、Theme、ValidationErrorKind 枚举，
以及 PRIORITY_RANK 优先级排序权重映射。
"""

from enum import StrEnum


class TaskPriority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# 排序权重：数值越小越靠前
PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.URGENT: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}


class TaskFilter(StrEnum):
    """完成状态筛选"""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class Theme(StrEnum):
    """界面主题"""

    LIGHT = "light"
    DARK = "dark"


class ValidationErrorKind(StrEnum):
    """校验失败类型"""

    REQUIRED = "required"
    TOO_LONG = "too_long"
