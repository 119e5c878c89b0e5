"""Run dialog actions against a step configuration stored as JSON."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from text_file_input.core.envelope import (
    ACTION_STATUS,
    GET_FIELDS,
    SET_MINIMAL_WIDTH,
    SHOW_CONTENT,
    SHOW_FILES,
    SUCCESS,
    VALIDATE_SHOW_CONTENT,
)
from text_file_input.core.helper import TextFileInputHelper
from text_file_input.models import StepConfig

console = Console()

StepPath = Annotated[Path, typer.Argument(help="Path to the step configuration JSON.", exists=True, dir_okay=False)]
EnvOption = Annotated[list[str] | None, typer.Option("--env", "-e", help="Variable as NAME=VALUE (repeatable).")]

_FIELD_COLUMNS = ["name", "type", "position", "length", "format", "trimType"]


def _get_helper() -> TextFileInputHelper:
    from text_file_input.adapters.defaults import create_default_helper

    return create_default_helper()


def _load_step(path: Path) -> StepConfig:
    try:
        return StepConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        console.print(f"[red]Invalid step configuration {path}:[/red]\n{exc}")
        raise typer.Exit(2) from None


def _parse_env(values: Sequence[str] | None) -> dict[str, str] | None:
    if not values:
        return None
    env: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE, got {item!r}", param_hint="--env")
        env[name] = value
    return env


def _run(action: str, step_path: Path, params: dict[str, str], env: Sequence[str] | None) -> dict[str, Any]:
    step = _load_step(step_path)
    params = {"stepName": step.name or step_path.stem, **params}
    response = _get_helper().handle_step_action(action, step, params, environment=_parse_env(env))
    body = response.to_json()
    if body[ACTION_STATUS] != SUCCESS:
        console.print(f"[red]{body.get('error', 'FAILURE')}[/red]: {body.get('detail', '')}")
        raise typer.Exit(1)
    if "message" in body:
        console.print(f"[yellow]{body['message']}[/yellow]")
    return body


def _render_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def files(
    step_path: StepPath,
    filter: Annotated[str | None, typer.Option(help="Keep paths containing (or matching) this pattern.")] = None,
    regex: Annotated[bool, typer.Option(help="Treat --filter as a full-match regular expression.")] = False,
    env: EnvOption = None,
) -> None:
    """List the files the step would read."""
    params = {"isRegex": str(regex).lower()}
    if filter:
        params["filter"] = filter
    body = _run(SHOW_FILES, step_path, params, env)
    if "files" in body:
        _render_table(["file"], [(f,) for f in body["files"]])


def validate(step_path: StepPath, env: EnvOption = None) -> None:
    """Check that the step resolves to at least one file."""
    body = _run(VALIDATE_SHOW_CONTENT, step_path, {}, env)
    if "message" not in body:
        console.print("[green]OK[/green]")


def content(
    step_path: StepPath,
    lines: Annotated[int, typer.Option("--lines", "-n", help="Number of lines to show.")] = 10,
    skip_headers: Annotated[bool, typer.Option(help="Drop the declared header lines.")] = False,
    env: EnvOption = None,
) -> None:
    """Show the first lines of the first file."""
    params = {"nrlines": str(lines), "skipHeaders": str(skip_headers).lower()}
    body = _run(SHOW_CONTENT, step_path, params, env)
    for line in body.get("firstFileContent", []):
        console.print(line, markup=False, highlight=False)


def fields(step_path: StepPath, env: EnvOption = None) -> None:
    """Infer the step's fields from its first file."""
    body = _run(GET_FIELDS, step_path, {}, env)
    _render_table(_FIELD_COLUMNS, [[f[c] for c in _FIELD_COLUMNS] for f in body.get("fields", [])])


def minimal_width(step_path: StepPath) -> None:
    """Rewrite the declared fields to their narrowest presentation."""
    body = _run(SET_MINIMAL_WIDTH, step_path, {}, None)
    _render_table(_FIELD_COLUMNS, [[f[c] for c in _FIELD_COLUMNS] for f in body.get("updatedData", [])])
