"""应用状态与派生视图模型

AppState 是会话工作集，只由 TaskFlowController 持有和修改；
TaskView 是某一时刻按当前筛选条件计算出的只读快照，从不持久化。
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import TaskFilter, Theme
from .task import Task, TaskStats


class AppState(BaseModel):
    """会话状态"""

    model_config = ConfigDict(validate_assignment=True)

    tasks: list[Task] = Field(default_factory=list, description="权威任务集合（插入顺序）")
    filter: TaskFilter = Field(default=TaskFilter.ALL, description="完成状态筛选")
    search_term: str = Field(default="", description="搜索词")
    selected_category: str | None = Field(default=None, description="分类精确筛选")
    theme: Theme = Field(default=Theme.LIGHT, description="界面主题")


class TaskView(BaseModel):
    """派生视图快照"""

    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...] = Field(description="筛选并按优先级排序后的任务")
    categories: tuple[str, ...] = Field(description="全部任务的分类（去重、升序）")
    stats: TaskStats = Field(description="全部任务的统计")
    filter: TaskFilter
    search_term: str
    selected_category: str | None
    theme: Theme
    empty_message: str | None = Field(default=None, description="视图为空时的提示")
