"""展示用格式化工具"""

from datetime import datetime

from .clock import as_utc, utc_now
from .models.enums import TaskPriority

PRIORITY_LABELS: dict[TaskPriority, str] = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
    TaskPriority.URGENT: "Urgent",
}

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def priority_label(priority: TaskPriority | str) -> str:
    """优先级显示名"""
    return PRIORITY_LABELS[TaskPriority(priority)]


def format_date(value: datetime) -> str:
    """格式化为 "Jan 5, 2026" """
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def format_relative_time(value: datetime, now: datetime | None = None) -> str:
    """相对时间：1 小时内 "Just now"，24 小时内按小时，7 天内按天，否则显示日期"""
    current = as_utc(now) if now is not None else utc_now()
    diff_hours = int((current - as_utc(value)).total_seconds() // 3600)
    diff_days = diff_hours // 24

    if diff_hours < 1:
        return "Just now"
    if diff_hours < 24:
        return f"{diff_hours} hour{'' if diff_hours == 1 else 's'} ago"
    if diff_days < 7:
        return f"{diff_days} day{'' if diff_days == 1 else 's'} ago"
    return format_date(value)
