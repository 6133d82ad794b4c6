"""TaskFlow 异常体系

所有异常均可在会话内恢复：校验错误返回给调用方，
持久化错误由 TaskStorage 记录日志后降级处理。
"""

from dataclasses import dataclass

from .models.enums import ValidationErrorKind


class TaskFlowError(Exception):
    """TaskFlow 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可在当前会话内恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


@dataclass(frozen=True)
class ValidationIssue:
    """单个字段的校验问题"""

    field: str
    kind: ValidationErrorKind
    message: str


class TaskValidationError(TaskFlowError):
    """任务输入校验失败（标题必填/过长、描述过长、分类必填）

    发生时不会修改任务集合。
    """

    def __init__(self, issues: list[ValidationIssue]) -> None:
        if not issues:
            raise ValueError("TaskValidationError requires at least one issue")
        super().__init__("; ".join(issue.message for issue in issues))
        self.issues = list(issues)

    @property
    def kind(self) -> ValidationErrorKind:
        """第一个问题的类型"""
        return self.issues[0].kind

    @property
    def messages(self) -> dict[str, str]:
        """字段名 -> 错误信息"""
        return {issue.field: issue.message for issue in self.issues}


class PersistenceError(TaskFlowError):
    """键值存储读写失败

    由存储层抛出，TaskStorage 捕获后记录日志，不向上传播。
    """

    def __init__(self, operation: str, key: str, original_error: Exception) -> None:
        """
        Args:
            operation: 失败的操作（get/set/delete）
            key: 存储槽键名
            original_error: 原始异常
        """
        super().__init__(
            f"存储操作失败: {operation} {key} -- {original_error}",
            recoverable=True,
        )
        self.operation = operation
        self.key = key
        self.original_error = original_error
