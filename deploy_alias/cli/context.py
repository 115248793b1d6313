from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from deploy_alias.core import Err, ErrorCode, Project, load_project
from deploy_alias.output import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    project: Project
    console: ConsoleProtocol


def build_context(cwd: Path | None = None) -> CLIContext:
    try:
        root = (cwd or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --cwd: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir():
        typer.echo(f"error: not a directory: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    project_result = load_project(root)
    if isinstance(project_result, Err):
        typer.echo(f"error: {project_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    console = RichConsole()
    for warning in project_result.value.warnings:
        console.warning(warning)

    return CLIContext(root=root, project=project_result.value, console=console)
