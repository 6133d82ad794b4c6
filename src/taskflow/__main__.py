"""CLI 入口模块 -- python -m taskflow <command>

每次调用是一个会话：从配置的数据库恢复状态，执行一个操作，打印结果。

支持的命令：
  list             按筛选条件列出任务
  add              创建任务
  toggle           切换完成状态
  edit             部分更新任务
  delete           删除任务
  clear-completed  清除已完成任务
  stats            任务统计
  categories       分类列表
  theme            查看或设置主题
"""

import argparse
import asyncio
import sys
from datetime import datetime

from .clock import as_utc
from .config import TaskFlowConfig, load_config
from .controller import TaskFlowController
from .exceptions import TaskValidationError
from .formatting import format_date, format_relative_time, priority_label
from .logging_config import setup_logging
from .models import CreateTaskInput, Task, TaskFilter, TaskPriority, Theme, UpdateTaskInput
from .persistence import TaskStorage
from .store import create_kv_store
from .views import is_overdue


def _parse_due(raw: str) -> datetime:
    try:
        return as_utc(datetime.fromisoformat(raw))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"无效的日期: {raw}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskflow", description="TaskFlow 任务管理")
    parser.add_argument("--db", default=None, help="SQLite 数据库路径（覆盖 TASKFLOW_DB_PATH）")

    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="列出任务")
    list_cmd.add_argument(
        "--filter", choices=[f.value for f in TaskFilter], default=TaskFilter.ALL.value
    )
    list_cmd.add_argument("--search", default="")
    list_cmd.add_argument("--category", default=None)

    add = sub.add_parser("add", help="创建任务")
    add.add_argument("title")
    add.add_argument("--description", default=None)
    add.add_argument("--priority", choices=[p.value for p in TaskPriority], default=None)
    add.add_argument("--category", default=None)
    add.add_argument("--due", type=_parse_due, default=None)

    toggle = sub.add_parser("toggle", help="切换完成状态")
    toggle.add_argument("id")

    edit = sub.add_parser("edit", help="部分更新任务")
    edit.add_argument("id")
    edit.add_argument("--title")
    description = edit.add_mutually_exclusive_group()
    description.add_argument("--description")
    description.add_argument("--clear-description", action="store_true", help="清空描述")
    edit.add_argument("--priority", choices=[p.value for p in TaskPriority])
    edit.add_argument("--category")
    due = edit.add_mutually_exclusive_group()
    due.add_argument("--due", type=_parse_due)
    due.add_argument("--clear-due", action="store_true", help="清空截止时间")

    delete = sub.add_parser("delete", help="删除任务")
    delete.add_argument("id")

    sub.add_parser("clear-completed", help="清除已完成任务")
    sub.add_parser("stats", help="任务统计")
    sub.add_parser("categories", help="分类列表")

    theme = sub.add_parser("theme", help="查看或设置主题")
    theme.add_argument("value", nargs="?", choices=[t.value for t in Theme])

    return parser


def format_task(task: Task, now: datetime | None = None) -> str:
    """单行任务展示"""
    mark = "x" if task.completed else " "
    line = (
        f"[{mark}] {task.id}  {priority_label(task.priority):<6}  "
        f"{task.title}  ({task.category}, {format_relative_time(task.created_at, now)})"
    )
    if task.due_date is not None:
        line += f"  due {format_date(task.due_date)}"
        if is_overdue(task, now):
            line += "  OVERDUE"
    return line


async def run(args: argparse.Namespace, config: TaskFlowConfig) -> int:
    """执行单个命令，返回退出码"""
    store = await create_kv_store(args.db or config.db_path)
    try:
        controller = TaskFlowController(
            TaskStorage(store),
            default_categories=config.default_categories,
        )
        await controller.load()
        return await _dispatch(controller, args, config)
    finally:
        await store.close()


async def _dispatch(
    controller: TaskFlowController,
    args: argparse.Namespace,
    config: TaskFlowConfig,
) -> int:
    command = args.command

    if command == "list":
        controller.set_filter(args.filter)
        controller.set_search_term(args.search)
        controller.set_selected_category(args.category)
        view = controller.view()
        if view.empty_message:
            print(view.empty_message)
        for task in view.tasks:
            print(format_task(task))
        return 0

    if command == "add":
        data = CreateTaskInput(
            title=args.title,
            description=args.description,
            priority=args.priority or config.default_priority,
            category=args.category if args.category is not None else controller.default_category(),
            due_date=args.due,
        )
        try:
            task = await controller.create(data)
        except TaskValidationError as e:
            _print_validation_error(e)
            return 1
        print(f"已创建: {format_task(task)}")
        return 0

    if command == "toggle":
        task = await controller.toggle_complete(args.id)
        if task is None:
            print(f"任务不存在: {args.id}")
            return 1
        print(format_task(task))
        return 0

    if command == "edit":
        fields = {
            name: getattr(args, arg)
            for name, arg in (
                ("title", "title"),
                ("description", "description"),
                ("priority", "priority"),
                ("category", "category"),
                ("due_date", "due"),
            )
            if getattr(args, arg) is not None
        }
        # 显式传入 None 表示清空
        if args.clear_description:
            fields["description"] = None
        if args.clear_due:
            fields["due_date"] = None
        try:
            task = await controller.edit(args.id, UpdateTaskInput(**fields))
        except TaskValidationError as e:
            _print_validation_error(e)
            return 1
        if task is None:
            print(f"任务不存在: {args.id}")
            return 1
        print(format_task(task))
        return 0

    if command == "delete":
        if not await controller.delete(args.id):
            print(f"任务不存在: {args.id}")
            return 1
        print(f"已删除: {args.id}")
        return 0

    if command == "clear-completed":
        removed = await controller.clear_completed()
        print(f"已清除 {removed} 个已完成任务")
        return 0

    if command == "stats":
        stats = controller.stats()
        print(f"Total: {stats.total}")
        print(f"Active: {stats.active}")
        print(f"Completed: {stats.completed}")
        print(f"Overdue: {stats.overdue}")
        print(f"Completion rate: {stats.completion_rate}%")
        return 0

    if command == "categories":
        for category in controller.category_choices():
            print(category)
        return 0

    if command == "theme":
        if args.value:
            await controller.set_theme(args.value)
        print(controller.theme.value)
        return 0

    print(f"未知命令: {command}")
    return 1


def _print_validation_error(error: TaskValidationError) -> None:
    for issue in error.issues:
        print(f"{issue.field}: {issue.message}")


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口"""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config()
    setup_logging(config.log_format, config.log_level)
    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
