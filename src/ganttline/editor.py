"""Editor layer between the user interface and the core.

The UI (the CLI here) forwards its raw input to a GanttEditor: form
submissions, period changes, viewport resizes and pointer events. The editor
turns them into Task Store mutations and hands back plain data to draw.
"""

import logging
from datetime import date, datetime
from pathlib import Path

from .adapters.file_state import FileStateStore
from .config import Config
from .core import layout
from .core.calendar import CalendarConfig, Period, date_range
from .core.drag import CommitMode, DragController, DragUpdate, Gesture
from .core.export import export_filename, render
from .core.layout import BarGeometry, DaySegment
from .core.render import render_timeline
from .core.tasks import Task, ValidationError
from .store import TaskStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> TaskStore:
    """Open the task store at the configured state file and load it."""
    view = CalendarConfig(period_start=date.today().replace(day=1), period_kind=config.default_period)
    store = TaskStore(FileStateStore(config.state_path), title=config.document_title, view=view)
    store.load()
    return store


def get_editor(config: Config) -> "GanttEditor":
    return GanttEditor(
        get_store(config),
        viewport_width=config.viewport_width,
        handle_width=config.handle_width,
        commit_mode=config.drag_commit,
    )


class GanttEditor:
    """
    Collaborator interface of the timeline.

    Rejected edits are logged and returned as None; the reason is kept in
    last_error for the caller to show.
    """

    def __init__(
        self,
        store: TaskStore,
        viewport_width: float = 1200.0,
        handle_width: float = layout.HANDLE_WIDTH,
        commit_mode: CommitMode = CommitMode.LIVE,
    ):
        self.store = store
        self.viewport_width = viewport_width
        self.handle_width = handle_width
        self.drag = DragController(commit_mode)
        self.last_error: str | None = None

    # ============== Geometry ==============

    @property
    def dates(self) -> list[date]:
        return date_range(self.store.view)

    @property
    def day_width(self) -> float:
        return layout.day_width(self.viewport_width, len(self.dates))

    def resize_viewport(self, width: float) -> float:
        """Set the container width. Returns the new column width."""
        if width <= 0:
            raise ValueError(f"Viewport width must be positive, got {width}")
        self.viewport_width = width
        return self.day_width

    def rows(self) -> list[tuple[Task, list[DaySegment]]]:
        """Every task with its visible segments, in display order."""
        dates = self.dates
        return [(t, layout.segments(t, dates, self.store.overrides)) for t in self.store.tasks]

    def bar(self, task_id: int) -> BarGeometry:
        return layout.bar_geometry(self.store.get(task_id), self.dates, self.day_width)

    def timeline(self, cell_width: int = 3) -> str:
        return render_timeline(self.dates, self.store.tasks, self.store.overrides, cell_width)

    # ============== Tasks ==============

    def create_task(
        self,
        name: str,
        assignee: str,
        start_date: date | str | None = None,
        duration: int = 1,
    ) -> Task | None:
        try:
            task = self.store.add(name, assignee, start_date, duration)
        except ValidationError as e:
            return self._rejected("create", e)
        self.last_error = None
        return task

    def edit_task(
        self,
        task_id: int,
        name: str | None = None,
        assignee: str | None = None,
        start_date: date | str | None = None,
        duration: int | None = None,
    ) -> Task | None:
        try:
            task = self.store.update(task_id, name, assignee, start_date, duration)
        except ValidationError as e:
            return self._rejected("edit", e)
        self.last_error = None
        return task

    def delete_task(self, task_id: int) -> None:
        session = self.drag.session
        if session is not None and session.task_id == task_id:
            self.drag.cancel()
        self.store.remove(task_id)

    def clear(self) -> None:
        self.drag.cancel()
        self.store.clear()

    # ============== Calendar ==============

    def set_period(self, kind: Period | str, start: date | str) -> list[date]:
        """Select a period. Raises InvalidConfig for an unparseable start."""
        kind = Period(kind) if isinstance(kind, str) else kind
        self.store.set_view(CalendarConfig(period_start=start, period_kind=kind))
        return self.dates

    def toggle_day(self, d: date | str) -> bool:
        """Flip a day between working and non-working."""
        return self.store.toggle_day(d)

    # ============== Pointer events ==============

    def on_pointer_down(self, x: float, task_id: int, gesture: Gesture | None = None) -> Gesture | None:
        """
        Press on a task bar at timeline x.

        Without an explicit gesture the press is hit-tested, so edge handles
        win over the body. Returns the gesture started, or None.
        """
        task = self.store.get(task_id)
        if gesture is None:
            gesture = layout.hit_test(
                task,
                self.dates,
                self.store.overrides,
                self.day_width,
                x,
                self.handle_width,
            )
        if gesture is None:
            return None
        if not self.drag.pointer_down(task, gesture, x):
            return None
        return gesture

    def on_pointer_move(self, x: float) -> Task | None:
        """Drag to timeline x. Returns the task if it was changed."""
        return self._commit(self.drag.pointer_move(x, self.day_width))

    def on_pointer_up(self) -> Task | None:
        return self._commit(self.drag.pointer_up())

    def on_pointer_cancel(self) -> None:
        """Pointer capture lost. Buffered results are dropped."""
        self.drag.cancel()

    def _commit(self, update: DragUpdate | None) -> Task | None:
        if update is None:
            return None
        if update.task_id not in self.store:
            logger.warning(f"Dropping drag result for missing task {update.task_id}")
            self.drag.cancel()
            return None
        return self.store.reschedule(update)

    # ============== Export ==============

    def export(self, now: datetime | None = None) -> tuple[str, str]:
        """Returns (filename, markdown)."""
        title = self.store.title
        return export_filename(title, now), render(title, self.store.tasks, self.store.overrides)

    def write_export(self, directory: Path, now: datetime | None = None) -> Path:
        filename, content = self.export(now)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(content, encoding="utf-8")
        logger.debug(f"Exported {len(self.store)} tasks to {path}")
        return path

    def _rejected(self, action: str, error: ValidationError) -> None:
        logger.warning(f"Rejected task {action}: {error}")
        self.last_error = str(error)
        return None
