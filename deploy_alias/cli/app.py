from __future__ import annotations

import typer

from deploy_alias.cli.commands.deploy_cmd import deploy


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)

app.command()(deploy)


def main() -> None:
    app()
