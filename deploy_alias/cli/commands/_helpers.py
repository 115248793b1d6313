"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from deploy_alias.core.errors import DeployError, exit_code_for
from deploy_alias.core.result import Err, Result
from deploy_alias.output.console import Style

if TYPE_CHECKING:
    from deploy_alias.cli.context import CLIContext


T = TypeVar("T")


def exit_on_error(result: Result[T, DeployError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code.

    Replaces the common pattern:
        match result:
            case Err(e):
                ctx.console.error(e.message)
                if e.hint:
                    ctx.console.print(f"hint: {e.hint}", Style.DIM)
                raise typer.Exit(code=int(exit_code_for(e)))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        error = result.error
        ctx.console.error(error.message)
        if error.hint:
            ctx.console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(exit_code_for(error)))
    return result.value
