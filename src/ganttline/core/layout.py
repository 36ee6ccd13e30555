"""Timeline geometry - maps dates to pixels and tasks to day segments.

Pure functions - no I/O.
"""

from dataclasses import dataclass
from datetime import date

from .calendar import is_non_working
from .drag import Gesture
from .tasks import Task

HANDLE_WIDTH = 1.0


@dataclass(frozen=True)
class DaySegment:
    """One visible day of a task bar."""

    date: date
    index: int
    is_working_day: bool


@dataclass(frozen=True)
class SegmentRun:
    """Adjacent segments with the same working/non-working classification."""

    start_index: int
    length: int
    is_working_day: bool
    left_cap: bool
    right_cap: bool

    @property
    def end_index(self) -> int:
        return self.start_index + self.length - 1


@dataclass(frozen=True)
class BarGeometry:
    """Placement of a whole task bar."""

    left: float
    width: float

    @property
    def right(self) -> float:
        return self.left + self.width


def day_width(container_width: float, count: int) -> float:
    """Column width that fills the container exactly."""
    if count <= 0:
        raise ValueError("Cannot lay out an empty calendar")
    return container_width / count


def day_index(d: date, calendar: list[date]) -> int:
    """Whole days from the first calendar date. Negative before the window."""
    return (d - calendar[0]).days


def pixel_offset(d: date, calendar: list[date], width: float) -> float:
    """Horizontal offset of a date. Dates before the window are negative."""
    return day_index(d, calendar) * width


def bar_geometry(task: Task, calendar: list[date], width: float) -> BarGeometry:
    return BarGeometry(
        left=pixel_offset(task.start_date, calendar, width),
        width=task.duration * width,
    )


def segments(
    task: Task,
    calendar: list[date],
    overrides: frozenset[str] | set[str],
) -> list[DaySegment]:
    """
    Split a task into per-day segments.

    Days outside the calendar window are dropped, so the bar is clipped at
    the viewport edges.
    """
    end = task.end_date
    return [
        DaySegment(date=day, index=index, is_working_day=not is_non_working(day, overrides))
        for index, day in enumerate(calendar)
        if task.start_date <= day <= end
    ]


def segment_runs(segs: list[DaySegment]) -> list[SegmentRun]:
    """
    Group segments into runs of the same classification.

    The first run carries the left cap and the last run the right cap.
    """
    runs: list[SegmentRun] = []
    start = 0
    for i in range(1, len(segs) + 1):
        if (
            i == len(segs)
            or segs[i].is_working_day != segs[start].is_working_day
            or segs[i].index != segs[i - 1].index + 1
        ):
            runs.append(
                SegmentRun(
                    start_index=segs[start].index,
                    length=i - start,
                    is_working_day=segs[start].is_working_day,
                    left_cap=start == 0,
                    right_cap=i == len(segs),
                )
            )
            start = i
    return runs


def hit_test(
    task: Task,
    calendar: list[date],
    overrides: frozenset[str] | set[str],
    width: float,
    x: float,
    handle_width: float = HANDLE_WIDTH,
) -> Gesture | None:
    """
    Which gesture a press at x starts on this task, if any.

    Edge handles sit on the first and last visible segments and take
    priority over the body.
    """
    segs = segments(task, calendar, overrides)
    if not segs:
        return None

    first_left = segs[0].index * width
    last_right = (segs[-1].index + 1) * width
    if first_left <= x < first_left + handle_width:
        return Gesture.RESIZE_LEFT
    if last_right - handle_width <= x < last_right:
        return Gesture.RESIZE_RIGHT
    if any(s.index * width <= x < (s.index + 1) * width for s in segs):
        return Gesture.MOVE
    return None
