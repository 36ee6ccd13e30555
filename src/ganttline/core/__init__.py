"""Functional core - pure timeline logic with no I/O."""

from .calendar import (
    CalendarConfig,
    InvalidConfig,
    Period,
    date_range,
    is_non_working,
    parse_date,
    toggle,
)
from .drag import CommitMode, DragController, DragSession, DragUpdate, Gesture
from .export import export_filename
from .layout import (
    BarGeometry,
    DaySegment,
    SegmentRun,
    bar_geometry,
    day_width,
    hit_test,
    pixel_offset,
    segment_runs,
    segments,
)
from .render import render_timeline
from .tasks import Task, ValidationError

__all__ = [
    # Calendar
    "CalendarConfig",
    "InvalidConfig",
    "Period",
    "date_range",
    "is_non_working",
    "parse_date",
    "toggle",
    # Tasks
    "Task",
    "ValidationError",
    # Layout
    "BarGeometry",
    "DaySegment",
    "SegmentRun",
    "bar_geometry",
    "day_width",
    "hit_test",
    "pixel_offset",
    "segment_runs",
    "segments",
    # Drag
    "CommitMode",
    "DragController",
    "DragSession",
    "DragUpdate",
    "Gesture",
    # Export
    "export_filename",
    # Render
    "render_timeline",
]
