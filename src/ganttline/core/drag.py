"""Pointer drag state machine for moving and resizing task bars.

Pure logic - no I/O. The controller never touches the task store itself: it
hands back DragUpdate values and the caller decides when to commit them.

States:
    Idle                 session is None
    Dragging(session)    between pointer_down and pointer_up/cancel
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .tasks import Task

logger = logging.getLogger(__name__)

FIRST_DAY = date.min.toordinal()
LAST_DAY = date.max.toordinal()


class Gesture(Enum):
    """What a drag does to the task it grabbed."""

    MOVE = "move"
    RESIZE_LEFT = "resize-left"
    RESIZE_RIGHT = "resize-right"


class CommitMode(Enum):
    """When drag results are handed to the store."""

    LIVE = "live"  # every pointer move
    RELEASE = "release"  # once, on pointer up


@dataclass(frozen=True)
class DragUpdate:
    """New start/duration for the dragged task."""

    task_id: int
    start_date: date
    duration: int


@dataclass
class DragSession:
    """Baseline captured at pointer-down. Never persisted."""

    task_id: int
    gesture: Gesture
    pointer_start_x: float
    baseline_start_date: date
    baseline_duration: int
    pending: DragUpdate | None = None


def round_days(value: float) -> int:
    """Round to the nearest whole day, halves upward."""
    return math.floor(value + 0.5)


def apply_gesture(
    gesture: Gesture,
    start_date: date,
    duration: int,
    days_delta: int,
) -> tuple[date, int]:
    """
    Derive (start_date, duration) from a baseline and a day delta.

    Pure function - no I/O. Duration never drops below one day and the bar
    is pinned inside date.min..date.max however far the pointer travels.
    """
    first = start_date.toordinal()
    last = first + duration - 1
    match gesture:
        case Gesture.MOVE:
            first = min(max(first + days_delta, FIRST_DAY), LAST_DAY - (duration - 1))
            return date.fromordinal(first), duration
        case Gesture.RESIZE_RIGHT:
            return start_date, max(1, min(duration + days_delta, LAST_DAY - first + 1))
        case Gesture.RESIZE_LEFT:
            new_duration = max(1, min(duration - days_delta, last - FIRST_DAY + 1))
            # Right edge stays put
            return date.fromordinal(last - new_duration + 1), new_duration
    raise ValueError(f"Unknown gesture: {gesture!r}")


class DragController:
    """Interprets pointer down/move/up as a move or resize gesture."""

    def __init__(self, commit_mode: CommitMode = CommitMode.LIVE):
        self.commit_mode = commit_mode
        self.session: DragSession | None = None

    @property
    def is_dragging(self) -> bool:
        return self.session is not None

    def pointer_down(self, task: Task, gesture: Gesture, pointer_x: float) -> bool:
        """Start a drag. Ignored (returns False) while another drag is active."""
        if self.session is not None:
            logger.debug(
                f"Ignoring pointer down on task {task.id}: task {self.session.task_id} is being dragged"
            )
            return False
        self.session = DragSession(
            task_id=task.id,
            gesture=gesture,
            pointer_start_x=pointer_x,
            baseline_start_date=task.start_date,
            baseline_duration=task.duration,
        )
        logger.debug(f"Drag started: task {task.id}, {gesture.value} at x={pointer_x}")
        return True

    def pointer_move(self, pointer_x: float, day_width: float) -> DragUpdate | None:
        """
        Recompute the dragged task from the baseline and the pointer position.

        Returns the update to commit now, or None while idle or when commits
        are buffered until release.
        """
        session = self.session
        if session is None:
            return None
        if day_width <= 0:
            raise ValueError(f"Day width must be positive, got {day_width}")

        days_delta = round_days((pointer_x - session.pointer_start_x) / day_width)
        start_date, duration = apply_gesture(
            session.gesture,
            session.baseline_start_date,
            session.baseline_duration,
            days_delta,
        )
        update = DragUpdate(session.task_id, start_date, duration)
        session.pending = update

        if self.commit_mode is CommitMode.LIVE:
            return update
        return None

    def pointer_up(self) -> DragUpdate | None:
        """
        End the drag.

        In release mode this returns the buffered result. In live mode the
        last move was already committed, so there is nothing more to apply.
        """
        session = self.session
        self.session = None
        if session is None:
            return None
        logger.debug(f"Drag finished: task {session.task_id}")
        if self.commit_mode is CommitMode.RELEASE:
            return session.pending
        return None

    def cancel(self) -> None:
        """Drop the session after losing pointer capture."""
        if self.session is not None:
            logger.debug(f"Drag cancelled: task {self.session.task_id}")
        self.session = None
