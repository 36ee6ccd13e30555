"""Task store - the mutable task collection and its persistence."""

import json
import logging
from datetime import date

from .adapters.file_state import MemoryStateStore
from .core.calendar import CalendarConfig, InvalidConfig, Period, parse_date, toggle
from .core.drag import DragUpdate
from .core.tasks import Task, ValidationError, validate_fields
from .ports.state_store import StateStore

logger = logging.getLogger(__name__)

STATE_VERSION = 1
DEFAULT_TITLE = "Gantt Chart"


def default_view(today: date | None = None) -> CalendarConfig:
    """A sprint starting on the first day of the current month."""
    today = today or date.today()
    return CalendarConfig(period_start=today.replace(day=1), period_kind=Period.SPRINT)


class TaskStore:
    """
    Owns the tasks, the non-working-day overrides, the document title and
    the selected period.

    Every mutation is written through to the backend when autosave is on.
    """

    def __init__(
        self,
        backend: StateStore | None = None,
        autosave: bool = True,
        title: str = DEFAULT_TITLE,
        view: CalendarConfig | None = None,
    ):
        self.backend = backend if backend is not None else MemoryStateStore()
        self.autosave = autosave
        self.tasks: list[Task] = []
        self.overrides: frozenset[str] = frozenset()
        self.title = title
        self.view = view or default_view()
        self._default_title = title
        self._default_view = self.view
        self._next_id = 1

    # ============== Queries ==============

    def get(self, task_id: int) -> Task:
        """Look up a task. Raises KeyError for unknown ids."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise KeyError(task_id)

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    # ============== Mutations ==============

    def add(
        self,
        name: str,
        assignee: str,
        start_date: date | str | None = None,
        duration: int = 1,
    ) -> Task:
        """Create a task. Starts today with a one-day duration unless told otherwise."""
        validate_fields(name, assignee, duration)
        start = self._parse_start(start_date) if start_date is not None else date.today()

        task = Task(
            id=self._allocate_id(),
            name=name,
            assignee=assignee,
            start_date=start,
            duration=duration,
        )
        self.tasks.append(task)
        logger.debug(f"Added task {task.id} ({task.name})")
        self._changed()
        return task

    def update(
        self,
        task_id: int,
        name: str | None = None,
        assignee: str | None = None,
        start_date: date | str | None = None,
        duration: int | None = None,
    ) -> Task:
        """Edit a task. Fields left as None keep their current value."""
        task = self.get(task_id)
        new_name = task.name if name is None else name
        new_assignee = task.assignee if assignee is None else assignee
        new_duration = task.duration if duration is None else duration
        validate_fields(new_name, new_assignee, new_duration)
        new_start = task.start_date if start_date is None else self._parse_start(start_date)

        task.name = new_name
        task.assignee = new_assignee
        task.start_date = new_start
        task.duration = new_duration
        logger.debug(f"Updated task {task_id}")
        self._changed()
        return task

    def reschedule(self, update: DragUpdate) -> Task:
        """Apply a drag result to its task."""
        task = self.get(update.task_id)
        task.start_date = update.start_date
        task.duration = max(1, update.duration)
        self._changed()
        return task

    def remove(self, task_id: int) -> None:
        task = self.get(task_id)
        self.tasks.remove(task)
        logger.debug(f"Removed task {task_id}")
        self._changed()

    def clear(self) -> None:
        """Remove every task. Overrides and the period are kept."""
        self.tasks = []
        logger.debug("Cleared all tasks")
        self._changed()

    def toggle_day(self, d: date | str) -> bool:
        """Flip the working/non-working override for a date. Returns True if now overridden."""
        day = parse_date(d)
        self.overrides = toggle(day, self.overrides)
        self._changed()
        return day.isoformat() in self.overrides

    def set_view(self, view: CalendarConfig) -> None:
        """Select a new period. The start date is validated before it is stored."""
        start = parse_date(view.period_start)
        self.view = CalendarConfig(period_start=start, period_kind=view.period_kind)
        self._changed()

    def set_title(self, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Title must not be empty")
        self.title = title.strip()
        self._changed()

    # ============== Persistence ==============

    def to_dict(self) -> dict:
        return {
            "version": STATE_VERSION,
            "title": self.title,
            "view": {
                "period": self.view.period_kind.value,
                "start": parse_date(self.view.period_start).isoformat(),
            },
            "tasks": [t.to_dict() for t in self.tasks],
            "non_working_days": sorted(self.overrides),
            "next_id": self._next_id,
        }

    def save(self) -> None:
        """Write the full state to the backend."""
        self.backend.write(json.dumps(self.to_dict(), indent=2, ensure_ascii=False))

    def load(self) -> None:
        """
        Replace the in-memory state with what the backend holds.

        A missing or malformed state starts fresh instead of failing.
        """
        self._reset()
        try:
            content = self.backend.read()
            if content is None:
                return
            data = json.loads(content)
            tasks = [Task.from_dict(item) for item in data.get("tasks", [])]
            overrides = frozenset(parse_date(d).isoformat() for d in data.get("non_working_days", []))
            title = data.get("title") or self._default_title
            next_id = int(data.get("next_id", 1))
            view = self._default_view
            if data.get("view"):
                view = CalendarConfig(
                    period_start=parse_date(data["view"]["start"]),
                    period_kind=Period(data["view"]["period"]),
                )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring malformed saved state: {e}")
            return

        if len({t.id for t in tasks}) != len(tasks):
            logger.warning("Ignoring saved state with duplicate task ids")
            return

        self.tasks = tasks
        self.overrides = overrides
        self.title = title
        self.view = view
        self._next_id = max(next_id, max((t.id for t in tasks), default=0) + 1)
        logger.debug(f"Loaded {len(tasks)} tasks")

    # ============== Internals ==============

    def _allocate_id(self) -> int:
        task_id = self._next_id
        self._next_id += 1
        return task_id

    def _parse_start(self, value: date | str) -> date:
        try:
            return parse_date(value)
        except InvalidConfig as e:
            raise ValidationError(str(e)) from e

    def _reset(self) -> None:
        self.tasks = []
        self.overrides = frozenset()
        self.title = self._default_title
        self.view = self._default_view
        self._next_id = 1

    def _changed(self) -> None:
        if self.autosave:
            self.save()
