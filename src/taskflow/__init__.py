"""TaskFlow -- 单用户任务管理核心

任务模型、校验、派生视图计算、持久化适配器与状态控制器。
"""

from .controller import TaskFlowController
from .exceptions import PersistenceError, TaskFlowError, TaskValidationError, ValidationIssue
from .factory import apply_update, create_task
from .persistence import TaskStorage

__all__ = [
    "TaskFlowController",
    "TaskStorage",
    "create_task",
    "apply_update",
    "TaskFlowError",
    "TaskValidationError",
    "PersistenceError",
    "ValidationIssue",
]

__version__ = "0.1.0"
