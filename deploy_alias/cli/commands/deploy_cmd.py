from __future__ import annotations

import json
from pathlib import Path

import typer

from deploy_alias import __version__
from deploy_alias.cli.commands._helpers import exit_on_error
from deploy_alias.cli.context import build_context
from deploy_alias.services.branch import resolve_branch
from deploy_alias.services.deploy import DeployOrchestrator
from deploy_alias.services.now import DryRunNow, NowCli
from deploy_alias.services.status import DryRunStatus, GitHubStatusReporter


def deploy(
    now_args: list[str] | None = typer.Argument(
        None,
        help="Extra arguments passed to every `now` call (put them after --).",
        show_default=False,
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Log the `now` calls instead of running them."
    ),
    cwd: Path | None = typer.Option(None, "--cwd", help="Project directory (default: cwd)."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Deploy with now and alias the deployment for the current branch."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    ctx = build_context(cwd)
    project = ctx.project
    branch = resolve_branch(release_branch=project.config.release_branch)

    if dry_run:
        orchestrator = DeployOrchestrator(
            now=DryRunNow(console=ctx.console),
            report_status=DryRunStatus(console=ctx.console),
            console=ctx.console,
        )
    else:
        orchestrator = DeployOrchestrator(
            now=NowCli(cwd=ctx.root, console=ctx.console),
            report_status=GitHubStatusReporter(cwd=ctx.root, console=ctx.console),
            console=ctx.console,
        )

    result = orchestrator.run(
        project.config,
        project.target,
        rules_present=project.rules_present,
        branch=branch,
        extra_args=now_args or [],
        rules_path=project.rules_path,
    )
    deployed = exit_on_error(result, ctx)

    typer.echo(json.dumps(deployed.as_dict(), indent=2))
