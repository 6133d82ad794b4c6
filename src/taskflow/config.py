"""TaskFlowConfig -- 配置加载

从环境变量加载配置，非法值记录警告后回退到默认值，不阻塞启动。
"""

import os
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field

from .models.enums import TaskPriority

log = structlog.get_logger()

DEFAULT_CATEGORIES: tuple[str, ...] = ("Work", "Personal", "Shopping")


def _get_base_dir() -> Path:
    """获取 data 基础目录"""
    return Path(os.environ.get("TASKFLOW_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKFLOW_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskflow.db"),
    )


class TaskFlowConfig(BaseModel):
    """TaskFlow 配置 -- 从环境变量加载

    环境变量:
        TASKFLOW_DB_PATH: SQLite 数据库路径（默认 <TASKFLOW_DATA_DIR>/sqlite/taskflow.db）
        TASKFLOW_DEFAULT_PRIORITY: 新任务默认优先级（默认 medium）
        TASKFLOW_DEFAULT_CATEGORIES: 无任务时可选的分类，逗号分隔
        TASKFLOW_LOG_FORMAT: 日志格式（dev/json）
        TASKFLOW_LOG_LEVEL: 日志级别（默认 INFO）
    """

    db_path: str = Field(default_factory=get_db_path, description="SQLite 数据库路径")
    default_priority: TaskPriority = Field(
        default=TaskPriority.MEDIUM,
        description="新任务默认优先级",
    )
    default_categories: tuple[str, ...] = Field(
        default=DEFAULT_CATEGORIES,
        min_length=1,
        description="无任务时可选的默认分类",
    )
    log_format: Literal["dev", "json"] = Field(default="dev", description="日志格式")
    log_level: str = Field(default="INFO", description="日志级别")


def load_config() -> TaskFlowConfig:
    """从环境变量加载配置

    Returns:
        TaskFlowConfig 实例
    """
    kwargs: dict = {"db_path": get_db_path()}

    if val := os.environ.get("TASKFLOW_DEFAULT_PRIORITY"):
        try:
            kwargs["default_priority"] = TaskPriority(val.strip().lower())
        except ValueError:
            log.warning(
                "invalid_priority_config",
                env_var="TASKFLOW_DEFAULT_PRIORITY",
                value=val,
                fallback=TaskPriority.MEDIUM.value,
            )

    if val := os.environ.get("TASKFLOW_DEFAULT_CATEGORIES"):
        categories = tuple(part.strip() for part in val.split(",") if part.strip())
        if categories:
            kwargs["default_categories"] = categories
        else:
            log.warning(
                "invalid_categories_config",
                env_var="TASKFLOW_DEFAULT_CATEGORIES",
                value=val,
            )

    if val := os.environ.get("TASKFLOW_LOG_FORMAT"):
        if val in ("dev", "json"):
            kwargs["log_format"] = val
        else:
            log.warning(
                "invalid_log_format_config",
                env_var="TASKFLOW_LOG_FORMAT",
                value=val,
                fallback="dev",
            )

    if val := os.environ.get("TASKFLOW_LOG_LEVEL"):
        kwargs["log_level"] = val.upper()

    return TaskFlowConfig(**kwargs)
