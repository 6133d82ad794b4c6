"""Task Domain Model

Task 是任务集合中的单个条目。持久化时字段名使用 camelCase 别名
（createdAt、updatedAt、dueDate），与存储槽中的 JSON 布局保持一致。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..clock import as_utc
from .enums import TaskPriority

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


class Task(BaseModel):
    """Task 数据模型

    创建后不可原地修改，所有变更通过 model_copy 生成新实例。
    completed=True 的任务永远不会被判定为逾期。
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH, description="任务标题")
    description: str | None = Field(
        default=None,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="任务描述（可选）",
    )
    completed: bool = Field(default=False, description="是否已完成")
    priority: TaskPriority = Field(description="优先级")
    category: str = Field(min_length=1, description="分类")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")
    due_date: datetime | None = Field(default=None, description="截止时间（可选）")

    @field_validator("created_at", "updated_at", "due_date")
    @classmethod
    def _normalize_utc(cls, value: datetime | None) -> datetime | None:
        # 无时区时间按 UTC 解释
        return as_utc(value) if value is not None else None

    @field_validator("title", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Task":
        if self.updated_at < self.created_at:
            raise ValueError("updatedAt must not be earlier than createdAt")
        return self


class CreateTaskInput(BaseModel):
    """创建任务的输入"""

    title: str
    priority: TaskPriority
    category: str
    description: str | None = None
    due_date: datetime | None = None


class UpdateTaskInput(BaseModel):
    """部分更新输入

    只有显式赋值的字段（model_fields_set）会被应用，
    因此显式传入 None 可以清空 description / due_date。
    """

    title: str | None = None
    description: str | None = None
    priority: TaskPriority | None = None
    category: str | None = None
    due_date: datetime | None = None
    completed: bool | None = None


class TaskStats(BaseModel):
    """任务统计"""

    total: int = 0
    completed: int = 0
    active: int = 0
    overdue: int = 0
    completion_rate: int = Field(default=0, ge=0, le=100, description="完成率（百分比）")
