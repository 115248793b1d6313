"""GitHub commit statuses for assigned aliases.

After each alias assignment a "success" status pointing at the alias is
posted on the deployed commit, so the alias shows up on the pull request.
Statuses go through the `gh` CLI; repository and commit come from the
GITHUB_REPOSITORY and GITHUB_SHA variables set by GitHub Actions.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Mapping
from pathlib import Path

from deploy_alias.core.errors import DeployError
from deploy_alias.core.result import Err, Ok, Result
from deploy_alias.core.structured import get_str
from deploy_alias.output.console import ConsoleProtocol, Style
from deploy_alias.platform.process import run as run_process

__all__ = [
    "DEFAULT_CONTEXT",
    "DryRunStatus",
    "GitHubStatusReporter",
    "StatusReporter",
    "status_fields",
]

DEFAULT_CONTEXT = "deploy/alias"
GH_TIMEOUT_SECONDS = 60.0

StatusReporter = Callable[[str, Mapping[str, object]], Result[None, DeployError]]


def status_fields(alias: str, options: Mapping[str, object]) -> dict[str, str]:
    """Build the status payload for alias from the project's status options."""
    url = f"https://{alias}"
    return {
        "state": "success",
        "target_url": url,
        "description": get_str(options, "description") or url,
        "context": get_str(options, "context") or DEFAULT_CONTEXT,
    }


class GitHubStatusReporter:
    def __init__(
        self,
        *,
        cwd: Path,
        console: ConsoleProtocol,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._cwd = cwd
        self._console = console
        self._env = env

    def __call__(self, alias: str, options: Mapping[str, object]) -> Result[None, DeployError]:
        environ = os.environ if self._env is None else self._env
        repo = environ.get("GITHUB_REPOSITORY", "").strip()
        sha = environ.get("GITHUB_SHA", "").strip()
        if not repo or not sha:
            self._console.warning(
                f"GITHUB_REPOSITORY/GITHUB_SHA not set; skipping status for {alias}"
            )
            return Ok(None)

        if shutil.which("gh") is None:
            return Err(
                DeployError(
                    kind="status_failed",
                    message="gh: missing",
                    hint="Install GitHub CLI: https://cli.github.com/",
                )
            )

        fields = status_fields(alias, options)
        cmd = ["gh", "api", "--method", "POST", f"repos/{repo}/statuses/{sha}"]
        for key, value in fields.items():
            cmd += ["-f", f"{key}={value}"]

        env = None if self._env is None else {**os.environ, **self._env}
        result = run_process(cmd, cwd=self._cwd, env=env, timeout=GH_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(
                DeployError(
                    kind="status_failed",
                    message=f"failed to post status for {alias}",
                    hint=result.error.stderr.strip() or None,
                )
            )

        self._console.print(f"status {fields['context']}: {fields['target_url']}", Style.DIM)
        return Ok(None)


class DryRunStatus:
    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def __call__(self, alias: str, options: Mapping[str, object]) -> Result[None, DeployError]:
        fields = status_fields(alias, options)
        self._console.print(f"STATUS: {fields['context']} -> {fields['target_url']}", Style.DIM)
        return Ok(None)
