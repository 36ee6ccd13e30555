"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, timedelta

from .calendar import count_working_days


class ValidationError(ValueError):
    """Raised when task fields are rejected on create or edit."""

    pass


@dataclass
class Task:
    """A scheduled task bar. Duration counts days inclusively."""

    id: int
    name: str
    assignee: str
    start_date: date
    duration: int = 1

    @property
    def end_date(self) -> date:
        """Last day covered by the task."""
        return self.start_date + timedelta(days=self.duration - 1)

    def days(self) -> list[date]:
        """Every date the task covers, in order."""
        return [self.start_date + timedelta(days=i) for i in range(self.duration)]

    def working_days(self, overrides: frozenset[str] | set[str]) -> int:
        """Working days over the full span, not clipped to any window."""
        return count_working_days(self.start_date, self.duration, overrides)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "assignee": self.assignee,
            "start_date": self.start_date.isoformat(),
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Revive a Task from its persisted form. Raises ValidationError for bad fields."""
        name, assignee = data["name"], data["assignee"]
        duration = data.get("duration", 1)
        validate_fields(name, assignee, duration)
        return cls(
            id=int(data["id"]),
            name=name,
            assignee=assignee,
            start_date=date.fromisoformat(data["start_date"]),
            duration=duration,
        )


def validate_fields(name: str, assignee: str, duration: int = 1) -> None:
    """
    Reject empty names/assignees and durations below one day.

    Pure function - no I/O.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Task name must not be empty")
    if not isinstance(assignee, str) or not assignee.strip():
        raise ValidationError("Assignee must not be empty")
    if not isinstance(duration, int) or isinstance(duration, bool) or duration < 1:
        raise ValidationError(f"Duration must be a positive number of days, got {duration!r}")
