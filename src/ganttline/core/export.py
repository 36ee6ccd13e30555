"""Markdown export of the schedule - no I/O dependencies."""

from datetime import date, datetime

from .tasks import Task

DATE_FORMAT = "%d.%m"
STAMP_FORMAT = "%d.%m.%Y_%H:%M"

HEADER = "| Task | Assignee | Start | End | Duration | Working days |"
DIVIDER = "|------|----------|-------|-----|----------|--------------|"


def format_date(d: date, fmt: str = DATE_FORMAT) -> str:
    return d.strftime(fmt)


def escape_cell(text: str) -> str:
    """Keep a pipe inside a cell from splitting the row."""
    return text.replace("|", "\\|")


def format_task_row(task: Task, overrides: frozenset[str] | set[str], fmt: str = DATE_FORMAT) -> str:
    """
    Format a single task as a table row.

    Pure function - no I/O.
    """
    return (
        f"| {escape_cell(task.name)} | {escape_cell(task.assignee)} | {format_date(task.start_date, fmt)} | "
        f"{format_date(task.end_date, fmt)} | {task.duration} d | "
        f"{task.working_days(overrides)} wd |"
    )


def render(
    title: str,
    tasks: list[Task],
    overrides: frozenset[str] | set[str] = frozenset(),
    fmt: str = DATE_FORMAT,
) -> str:
    """
    Render the task list as a markdown document.

    Pure function - no I/O.
    """
    lines = [f"# {title}", "", "## Tasks", "", HEADER, DIVIDER]
    lines.extend(format_task_row(t, overrides, fmt) for t in tasks)
    return "\n".join(lines) + "\n"


def export_filename(title: str, now: datetime | None = None) -> str:
    """Download name for an export, stamped with local time."""
    now = now or datetime.now()
    title = title.replace("/", "-")
    return f"{title}_{now.strftime(STAMP_FORMAT)}.md"
