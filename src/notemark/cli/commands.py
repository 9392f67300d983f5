"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from notemark.config import Settings, load_config
from notemark.core.models import ElementList, MarkdownElement
from notemark.core.parser import MarkdownParser
from notemark.core.tasks import list_tasks, toggle_task_state
from notemark.logs import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def _read(path: str) -> str:
    """Read a note exactly as stored (line endings untouched)."""
    try:
        with Path(path).open(encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def _describe(element: MarkdownElement) -> str:
    """One-line summary of an element for terminal output."""
    data = element.model_dump(mode="json", exclude={"kind"})
    if not data:
        return element.kind
    fields = ", ".join(f"{k}={v!r}" for k, v in data.items())
    return f"{element.kind}: {fields}"


def parse_cmd(
    path: Annotated[str, typer.Argument(help="Note file to parse")],
    as_json: Annotated[bool, typer.Option("--json", help="Print elements as JSON")] = False,
    ):
    """Parse a note and print its elements."""
    settings = _settings()
    parser = MarkdownParser.from_settings(settings)
    report = parser.parse_report(_read(path))

    if as_json:
        typer.echo(ElementList.dump_json(list(report.elements), indent=2).decode())
    else:
        for element in report.elements:
            typer.echo(_describe(element))
    if report.error_count:
        typer.echo(f"Recovered from {report.error_count} error(s); last: {report.last_error}", err=True)


def tasks_cmd(
    path: Annotated[str, typer.Argument(help="Note file to scan for tasks")],
    ):
    """List task items with their index, state and nesting level."""
    settings = _settings()
    tasks = list_tasks(_read(path), MarkdownParser.from_settings(settings))
    if not tasks:
        typer.echo("No tasks found.")
        raise typer.Exit(1)
    for task in tasks:
        box = "x" if task.checked else " "
        typer.echo(f"{task.index:>3} [{box}] {'  ' * (task.level - 1)}{task.text}")


def toggle_cmd(
    path: Annotated[str, typer.Argument(help="Note file containing the task")],
    index: Annotated[int, typer.Argument(help="Task index as shown by 'notemark tasks'")],
    text: Annotated[str, typer.Option("--text", help="Expected task text")],
    checked: Annotated[bool, typer.Option("--checked/--unchecked", help="Expected current state")] = False,
    write: Annotated[bool, typer.Option("--write", help="Write the result back to the file")] = False,
    ):
    """Flip one task checkbox; exits 1 when the task does not match."""
    settings = _settings()
    content = _read(path)
    updated = toggle_task_state(content, index, text, checked, MarkdownParser.from_settings(settings))
    if updated == content:
        _fail(f"Task {index} not toggled: no task matches {text!r} ({'checked' if checked else 'unchecked'})")

    if write:
        try:
            with Path(path).open("w", encoding="utf-8", newline="") as f:
                f.write(updated)
        except OSError as e:
            _fail(f"Cannot write {path}", e)
        typer.echo(f"Toggled task {index} in {path}")
    else:
        typer.echo(updated, nl=False)


def config_cmd(
    max_nesting: Annotated[Optional[int], typer.Option("--max-nesting-level", help="Deepest quote or list level")] = None,
    ):
    """Print the effective settings as JSON."""
    settings = _settings(overrides={"max_nesting_level": max_nesting})
    typer.echo(settings.model_dump_json(indent=2))
