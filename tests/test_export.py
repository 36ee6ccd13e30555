"""Tests for markdown export and text rendering."""

from datetime import date, datetime

import pytest

from ganttline.core.calendar import CalendarConfig, Period, date_range
from ganttline.core.export import HEADER, export_filename, format_task_row, render
from ganttline.core.render import render_header, render_row, render_timeline
from ganttline.core.tasks import Task


@pytest.fixture
def task():
    # Friday through Monday
    return Task(id=1, name="Design", assignee="Ann", start_date=date(2024, 1, 5), duration=4)


@pytest.fixture
def sprint():
    return date_range(CalendarConfig(date(2024, 1, 1), Period.SPRINT))


class TestRender:
    def test_document_layout(self, task):
        md = render("Plan", [task])
        lines = md.splitlines()
        assert lines[0] == "# Plan"
        assert "## Tasks" in lines
        assert HEADER in lines
        assert lines[-1] == "| Design | Ann | 05.01 | 08.01 | 4 d | 2 wd |"
        assert md.endswith("\n")

    def test_overrides_change_working_days(self, task):
        row = format_task_row(task, {"2024-01-06"})
        assert row.endswith("| 3 wd |")

    def test_working_days_use_full_span(self):
        long_task = Task(id=2, name="Long", assignee="Bo", start_date=date(2023, 12, 25), duration=21)
        # Three full weeks from a Monday
        assert "| 21 d | 15 wd |" in render("Plan", [long_task])

    def test_empty(self):
        lines = render("Plan", []).splitlines()
        assert lines[-2] == HEADER
        assert lines[-1].startswith("|---")

    def test_custom_date_format(self, task):
        assert "| 2024-01-05 | 2024-01-08 |" in format_task_row(task, frozenset(), "%Y-%m-%d")

    def test_render_is_pure(self, task):
        before = task.to_dict()
        render("Plan", [task], {"2024-01-06"})
        assert task.to_dict() == before

    def test_pipes_in_cells_are_escaped(self):
        piped = Task(id=3, name="API | UI", assignee="Ann|Bo", start_date=date(2024, 1, 1), duration=1)
        row = format_task_row(piped, frozenset())
        assert row.startswith(r"| API \| UI | Ann\|Bo | 01.01 |")
        assert row.replace(r"\|", "").count("|") == 7


class TestExportFilename:
    def test_stamp(self):
        assert export_filename("Plan", datetime(2024, 3, 7, 9, 5)) == "Plan_07.03.2024_09:05.md"

    def test_slash_in_title(self):
        assert export_filename("Q1/Q2", datetime(2024, 3, 7, 9, 5)).startswith("Q1-Q2_")


class TestTimeline:
    def test_row_caps_and_fills(self, task, sprint):
        row = render_row(task, sprint, frozenset(), cell_width=3)
        assert "[==------==]" in row
        assert row.startswith("#1 Design")

    def test_single_day_task(self, sprint):
        one = Task(id=2, name="Meet", assignee="Bo", start_date=date(2024, 1, 2), duration=1)
        assert "[=]" in render_row(one, sprint, frozenset(), cell_width=3)

    def test_non_working_background(self, sprint):
        one = Task(id=2, name="Meet", assignee="Bo", start_date=date(2024, 1, 2), duration=1)
        row = render_row(one, sprint, frozenset(), cell_width=2, label_width=10)
        # Jan 6 and Jan 7 are cells 5 and 6
        assert row[10 + 5 * 2 : 10 + 7 * 2] == "...."

    def test_long_label_truncated(self, sprint):
        one = Task(id=2, name="x" * 50, assignee="Bo", start_date=date(2024, 1, 2), duration=1)
        row = render_row(one, sprint, frozenset(), cell_width=3, label_width=10)
        assert row[:10].endswith("~")
        assert len(row) == 10 + 15 * 3

    def test_header(self, sprint):
        days, weekdays = render_header(sprint, frozenset(), cell_width=3, label_width=10)
        assert days.endswith(" 14 15")
        assert weekdays[10:].startswith("  M  T  W  T  F  s  s")

    def test_timeline_has_row_per_task(self, task, sprint):
        other = Task(id=2, name="Meet", assignee="Bo", start_date=date(2024, 1, 2), duration=1)
        text = render_timeline(sprint, [task, other], frozenset())
        assert len(text.splitlines()) == 4
