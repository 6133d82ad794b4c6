"""时间工具：统一使用带时区的 UTC 时间"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """当前 UTC 时间"""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """无时区的 datetime 视为 UTC，带时区的转换到 UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
