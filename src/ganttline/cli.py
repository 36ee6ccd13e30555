"""ganttline CLI - timeline editor."""

import json
import logging
import sys
from pathlib import Path

import click

from .config import Config, load_config
from .core.calendar import InvalidConfig, Period, is_non_working, parse_date
from .core.drag import Gesture
from .core.tasks import ValidationError
from .editor import GanttEditor, get_editor


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _open() -> tuple[GanttEditor, Config]:
    config = load_config()
    return get_editor(config), config


def _describe(task) -> str:
    return (
        f"#{task.id} {task.name} ({task.assignee}): "
        f"{task.start_date.isoformat()} - {task.end_date.isoformat()}, {task.duration}d"
    )


@click.group()
@click.version_option(package_name="ganttline")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """ganttline - Gantt timeline editor."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("name")
@click.argument("assignee")
@click.option("--start", "-s", default=None, help="Start date (YYYY-MM-DD), defaults to today")
@click.option("--duration", "-d", type=int, default=1, show_default=True, help="Duration in days")
def add(name: str, assignee: str, start: str | None, duration: int):
    """Add a task."""
    editor, _ = _open()
    task = editor.create_task(name, assignee, start, duration)
    if task is None:
        _fail(editor.last_error or "task rejected")
    click.echo(f"Added {_describe(task)}")


@main.command()
@click.argument("task_id", type=int)
@click.option("--name", default=None, help="New task name")
@click.option("--assignee", default=None, help="New assignee")
@click.option("--start", "-s", default=None, help="New start date (YYYY-MM-DD)")
@click.option("--duration", "-d", type=int, default=None, help="New duration in days")
def edit(task_id: int, name: str | None, assignee: str | None, start: str | None, duration: int | None):
    """Edit a task."""
    editor, _ = _open()
    try:
        task = editor.edit_task(task_id, name, assignee, start, duration)
    except KeyError:
        _fail(f"no task with id {task_id}")
    if task is None:
        _fail(editor.last_error or "edit rejected")
    click.echo(f"Updated {_describe(task)}")


@main.command("rm")
@click.argument("task_id", type=int)
def remove(task_id: int):
    """Delete a task."""
    editor, _ = _open()
    try:
        editor.delete_task(task_id)
    except KeyError:
        _fail(f"no task with id {task_id}")
    click.echo(f"Deleted task #{task_id}")


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def clear(yes: bool):
    """Delete all tasks."""
    editor, _ = _open()
    if not yes and not click.confirm(f"Delete all {len(editor.store)} tasks?"):
        return
    editor.clear()
    click.echo("All tasks deleted.")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(as_json: bool):
    """List tasks."""
    editor, _ = _open()
    tasks = editor.store.tasks
    overrides = editor.store.overrides

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        **t.to_dict(),
                        "end_date": t.end_date.isoformat(),
                        "working_days": t.working_days(overrides),
                    }
                    for t in tasks
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not tasks:
        click.echo("No tasks.")
        return

    for task in tasks:
        click.echo(f"{_describe(task)}, {task.working_days(overrides)} working")


@main.command()
@click.argument("kind", type=click.Choice([p.value for p in Period]))
@click.option("--start", "-s", default=None, help="First date (YYYY-MM-DD), defaults to the current one")
def period(kind: str, start: str | None):
    """Select the viewing period."""
    editor, _ = _open()
    try:
        dates = editor.set_period(kind, start or editor.store.view.period_start)
    except InvalidConfig as e:
        _fail(str(e))
    click.echo(f"{kind.capitalize()}: {dates[0].isoformat()} - {dates[-1].isoformat()} ({len(dates)} days)")


@main.command()
@click.argument("day")
def toggle(day: str):
    """Flip a date between working and non-working."""
    editor, _ = _open()
    try:
        d = parse_date(day)
    except InvalidConfig as e:
        _fail(str(e))
    editor.toggle_day(d)
    state = "non-working" if is_non_working(d, editor.store.overrides) else "working"
    click.echo(f"{d.strftime('%a %Y-%m-%d')} is now a {state} day")


@main.command()
@click.option("--cell-width", type=int, default=None, help="Characters per day column")
def show(cell_width: int | None):
    """Draw the timeline."""
    editor, config = _open()
    click.echo(f"# {editor.store.title}\n")
    click.echo(editor.timeline(cell_width or config.cell_width))


@main.command()
@click.argument("task_id", type=int)
@click.option("--at", "at_x", type=float, required=True, help="Pointer-down x in pixels")
@click.option("--to", "to_x", type=float, multiple=True, required=True, help="Pointer-move x (repeatable)")
@click.option(
    "--gesture",
    type=click.Choice([g.value for g in Gesture]),
    default=None,
    help="Force a gesture instead of hit-testing the press",
)
@click.option("--width", type=float, default=None, help="Viewport width in pixels")
def drag(task_id: int, at_x: float, to_x: tuple[float, ...], gesture: str | None, width: float | None):
    """Replay a pointer drag on a task bar."""
    editor, _ = _open()
    if width is not None:
        try:
            editor.resize_viewport(width)
        except ValueError as e:
            _fail(str(e))

    try:
        started = editor.on_pointer_down(at_x, task_id, Gesture(gesture) if gesture else None)
    except KeyError:
        _fail(f"no task with id {task_id}")
    if started is None:
        _fail(f"x={at_x:g} is not on task #{task_id}")

    for x in to_x:
        editor.on_pointer_move(x)
    editor.on_pointer_up()

    click.echo(f"{started.value}: {_describe(editor.store.get(task_id))}")


@main.command()
@click.argument("new_title", required=False)
def title(new_title: str | None):
    """Show or change the document title."""
    editor, _ = _open()
    if new_title is None:
        click.echo(editor.store.title)
        return
    try:
        editor.store.set_title(new_title)
    except ValidationError as e:
        _fail(str(e))
    click.echo(f"Title set to {editor.store.title!r}")


@main.command()
@click.option("--output", "-o", type=click.Path(file_okay=False), default=None, help="Directory to write to")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print instead of writing a file")
def export(output: str | None, to_stdout: bool):
    """Export the task table as markdown."""
    editor, config = _open()
    if to_stdout:
        _, content = editor.export()
        click.echo(content, nl=False)
        return

    path = editor.write_export(Path(output) if output else config.export_path)
    click.echo(f"Exported to {path}")


if __name__ == "__main__":
    main()
