"""任务输入校验

标题：去除首尾空白后必填，且不超过 100 字符。
描述：可选，去除首尾空白后不超过 500 字符。
分类：去除首尾空白后必填。
"""

from .exceptions import TaskValidationError, ValidationIssue
from .models.enums import ValidationErrorKind
from .models.task import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    CreateTaskInput,
    UpdateTaskInput,
)

TITLE_REQUIRED = "Title is required"
TITLE_TOO_LONG = f"Title must be {MAX_TITLE_LENGTH} characters or less"
DESCRIPTION_TOO_LONG = f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less"
CATEGORY_REQUIRED = "Category is required"


def _title_issue(title: str) -> ValidationIssue | None:
    trimmed = title.strip()
    if not trimmed:
        return ValidationIssue("title", ValidationErrorKind.REQUIRED, TITLE_REQUIRED)
    if len(trimmed) > MAX_TITLE_LENGTH:
        return ValidationIssue("title", ValidationErrorKind.TOO_LONG, TITLE_TOO_LONG)
    return None


def _description_issue(description: str | None) -> ValidationIssue | None:
    if not description:
        return None
    if len(description.strip()) > MAX_DESCRIPTION_LENGTH:
        return ValidationIssue(
            "description", ValidationErrorKind.TOO_LONG, DESCRIPTION_TOO_LONG
        )
    return None


def _category_issue(category: str) -> ValidationIssue | None:
    if not category.strip():
        return ValidationIssue("category", ValidationErrorKind.REQUIRED, CATEGORY_REQUIRED)
    return None


def _raise_if_any(issues: list[ValidationIssue | None]) -> None:
    found = [issue for issue in issues if issue is not None]
    if found:
        raise TaskValidationError(found)


def validate_title(title: str) -> None:
    """校验标题

    Raises:
        TaskValidationError: 空标题（REQUIRED）或超长（TOO_LONG）
    """
    _raise_if_any([_title_issue(title)])


def validate_description(description: str | None) -> None:
    """校验描述，None 或空字符串总是合法

    Raises:
        TaskValidationError: 超长（TOO_LONG）
    """
    _raise_if_any([_description_issue(description)])


def validate_category(category: str) -> None:
    """校验分类

    Raises:
        TaskValidationError: 空分类（REQUIRED）
    """
    _raise_if_any([_category_issue(category)])


def collect_issues(data: CreateTaskInput | UpdateTaskInput) -> list[ValidationIssue]:
    """收集输入的全部校验问题（不在第一个问题处停止）

    对于 UpdateTaskInput，只检查显式赋值且非 None 的字段。
    """
    if isinstance(data, UpdateTaskInput):
        fields_set = data.model_fields_set
        candidates = [
            _title_issue(data.title)
            if "title" in fields_set and data.title is not None
            else None,
            _description_issue(data.description) if "description" in fields_set else None,
            _category_issue(data.category)
            if "category" in fields_set and data.category is not None
            else None,
        ]
    else:
        candidates = [
            _title_issue(data.title),
            _description_issue(data.description),
            _category_issue(data.category),
        ]
    return [issue for issue in candidates if issue is not None]


def validate_create_input(data: CreateTaskInput) -> None:
    """校验创建输入，所有问题合并为一个 TaskValidationError"""
    _raise_if_any(collect_issues(data))


def validate_update_input(data: UpdateTaskInput) -> None:
    """校验部分更新输入"""
    _raise_if_any(collect_issues(data))
