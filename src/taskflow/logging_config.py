"""structlog 配置模块

日志统一写入 stderr，stdout 只留给 CLI 输出。
dev 模式：pretty print 可读输出
json 模式：每行一个 JSON 事件
"""

import logging
import sys

import structlog

# 第三方库的逐条 SQL 调试日志
_NOISY_LOGGERS = ("aiosqlite",)


def _resolve_level(log_level: str) -> int:
    """级别名转 logging 常量；未知名称回退 INFO"""
    level = logging.getLevelNamesMapping().get(log_level.upper())
    return level if level is not None else logging.INFO


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(log_format: str = "dev", log_level: str = "INFO") -> None:
    """初始化 structlog 配置，可重复调用

    Args:
        log_format: "json" 或 "dev"（默认）
        log_level: 标准库 logging 级别名，大小写不敏感
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # 每次调用都重新生效，不缓存 logger
    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_resolve_level(log_level))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
