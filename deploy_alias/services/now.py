"""Invokers for the `now` deployment CLI.

An invoker takes the argument list for `now` and returns the URL it printed.
NowCli runs the real tool through npx; DryRunNow only logs.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from deploy_alias.core.errors import DeployError
from deploy_alias.core.result import Err, Ok, Result
from deploy_alias.output.console import ConsoleProtocol, Style
from deploy_alias.platform.process import run as run_process

__all__ = [
    "DRY_RUN_URL",
    "NOW_COMMAND",
    "TOKEN_ENV_VAR",
    "DryRunNow",
    "NowCli",
    "NowInvoker",
    "parse_url",
]

NOW_COMMAND = ("npx", "now")
TOKEN_ENV_VAR = "NOW_TOKEN"
DRY_RUN_URL = "<deployed-url>"

NowInvoker = Callable[[Sequence[str]], Result[str, DeployError]]


def parse_url(stdout: str) -> str | None:
    """Return the last non-empty line `now` printed (the deployment URL)."""
    lines = [line.strip() for line in stdout.splitlines() if line.strip()]
    return lines[-1] if lines else None


class NowCli:
    def __init__(
        self,
        *,
        cwd: Path,
        console: ConsoleProtocol,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._cwd = cwd
        self._console = console
        self._env = env
        self._timeout = timeout

    def __call__(self, args: Sequence[str]) -> Result[str, DeployError]:
        if shutil.which(NOW_COMMAND[0]) is None:
            return Err(
                DeployError(
                    kind="now_missing",
                    message=f"{NOW_COMMAND[0]}: missing",
                    hint="Install Node.js: https://nodejs.org/",
                )
            )

        cmd = [*NOW_COMMAND, *args]
        self._console.print(f"run: {' '.join(cmd)}", Style.DIM)

        environ = os.environ if self._env is None else self._env
        token = environ.get(TOKEN_ENV_VAR)
        if token:
            cmd += ["--token", token]

        # Injected variables overlay the inherited environment.
        env = None if self._env is None else {**os.environ, **self._env}
        result = run_process(cmd, cwd=self._cwd, env=env, timeout=self._timeout)
        if isinstance(result, Err):
            error = result.error
            return Err(
                DeployError(
                    kind="deploy_failed",
                    message=str(error),
                    hint=error.stderr.strip() or None,
                )
            )

        return Ok(parse_url(result.value) or "")


class DryRunNow:
    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def __call__(self, args: Sequence[str]) -> Result[str, DeployError]:
        self._console.print(f"RUN: {' '.join([*NOW_COMMAND, *args])}", Style.DIM)
        return Ok(DRY_RUN_URL)
