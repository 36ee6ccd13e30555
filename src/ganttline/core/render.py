"""Plain-text timeline rendering - no I/O dependencies."""

from datetime import date

from .calendar import is_non_working
from .layout import segment_runs, segments
from .tasks import Task

WORKING_FILL = "="
NON_WORKING_FILL = "-"
OFF_DAY_BACKGROUND = "."
LABEL_WIDTH = 24


def _label(text: str, width: int) -> str:
    if len(text) > width:
        text = text[: width - 1] + "~"
    return f"{text:<{width}}"


def render_header(
    calendar: list[date],
    overrides: frozenset[str] | set[str],
    cell_width: int = 3,
    label_width: int = LABEL_WIDTH,
) -> list[str]:
    """Two header lines: day of month, then weekday letter (lower-case when off)."""
    def weekday(d: date) -> str:
        letter = d.strftime("%a")[0]
        return letter.lower() if is_non_working(d, overrides) else letter

    days = "".join(f"{d.day:>{cell_width}}" for d in calendar)
    weekdays = "".join(f"{weekday(d):>{cell_width}}" for d in calendar)
    month = calendar[0].strftime("%b %Y")
    return [_label(month, label_width) + days, " " * label_width + weekdays]


def render_row(
    task: Task,
    calendar: list[date],
    overrides: frozenset[str] | set[str],
    cell_width: int = 3,
    label_width: int = LABEL_WIDTH,
) -> str:
    """
    One task line.

    Pure function - no I/O.
    """
    cells = [
        OFF_DAY_BACKGROUND * cell_width if is_non_working(d, overrides) else " " * cell_width
        for d in calendar
    ]
    for run in segment_runs(segments(task, calendar, overrides)):
        fill = WORKING_FILL if run.is_working_day else NON_WORKING_FILL
        for index in range(run.start_index, run.end_index + 1):
            cells[index] = fill * cell_width
        if run.left_cap:
            cells[run.start_index] = "[" + cells[run.start_index][1:]
        if run.right_cap:
            cells[run.end_index] = cells[run.end_index][:-1] + "]"

    label = f"#{task.id} {task.name}"
    return _label(label, label_width) + "".join(cells)


def render_timeline(
    calendar: list[date],
    tasks: list[Task],
    overrides: frozenset[str] | set[str],
    cell_width: int = 3,
    label_width: int = LABEL_WIDTH,
) -> str:
    """
    Draw the whole chart as text.

    Pure function - no I/O.
    """
    cell_width = max(cell_width, 2)
    lines = render_header(calendar, overrides, cell_width, label_width)
    lines.extend(render_row(t, calendar, overrides, cell_width, label_width) for t in tasks)
    return "\n".join(lines)
