from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest

from deploy_alias.core.result import Err, Ok, Result
from deploy_alias.output.console import MockConsole
from deploy_alias.platform.process import ProcessError
from deploy_alias.services import now as now_mod
from deploy_alias.services.now import DRY_RUN_URL, DryRunNow, NowCli, parse_url


def test_parse_url_takes_last_line() -> None:
    stdout = "> Deploying ~/site\n\nhttps://site-abc123.now.sh\n"
    assert parse_url(stdout) == "https://site-abc123.now.sh"


def test_parse_url_empty_output() -> None:
    assert parse_url("\n  \n") is None


def _fake_run(
    calls: list[list[str]],
    result: Result[str, ProcessError],
):
    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, env, timeout
        calls.append(cmd)
        return result

    return fake_run


def test_now_cli_runs_npx_now(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(now_mod.shutil, "which", lambda _: "/usr/bin/npx")
    monkeypatch.setattr(now_mod, "run_process", _fake_run(calls, Ok("site-1.now.sh\n")))

    invoke = NowCli(cwd=tmp_path, console=MockConsole(), env={})
    result = invoke(["docs"])

    assert result == Ok("site-1.now.sh")
    assert calls == [["npx", "now", "docs"]]


def test_now_cli_appends_token(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(now_mod.shutil, "which", lambda _: "/usr/bin/npx")
    monkeypatch.setattr(now_mod, "run_process", _fake_run(calls, Ok("ok")))
    console = MockConsole()

    invoke = NowCli(cwd=tmp_path, console=console, env={"NOW_TOKEN": "secret"})
    invoke(["alias", "a", "b"])

    assert calls == [["npx", "now", "alias", "a", "b", "--token", "secret"]]
    assert "secret" not in console.text


def test_now_cli_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    error = ProcessError(("npx", "now"), 1, "", "Error! not authorized\n")
    monkeypatch.setattr(now_mod.shutil, "which", lambda _: "/usr/bin/npx")
    monkeypatch.setattr(now_mod, "run_process", _fake_run([], Err(error)))

    result = NowCli(cwd=tmp_path, console=MockConsole(), env={})([])

    assert isinstance(result, Err)
    assert result.error.kind == "deploy_failed"
    assert result.error.hint == "Error! not authorized"


def test_now_cli_missing_npx(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(now_mod.shutil, "which", lambda _: None)

    result = NowCli(cwd=tmp_path, console=MockConsole(), env={})([])

    assert isinstance(result, Err)
    assert result.error.kind == "now_missing"


def test_dry_run_logs_and_returns_placeholder() -> None:
    console = MockConsole()

    result = DryRunNow(console=console)(["alias", "a", "b"])

    assert result == Ok(DRY_RUN_URL)
    assert console.messages == ["RUN: npx now alias a b"]


def test_now_cli_keeps_inherited_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    seen: list[Mapping[str, str] | None] = []

    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cmd, cwd, timeout
        seen.append(env)
        return Ok("site-1.now.sh")

    monkeypatch.setenv("PATH", "/usr/local/bin:/usr/bin")
    monkeypatch.setattr(now_mod.shutil, "which", lambda _: "/usr/bin/npx")
    monkeypatch.setattr(now_mod, "run_process", fake_run)

    NowCli(cwd=tmp_path, console=MockConsole(), env={"NOW_TOKEN": "secret"})([])

    assert seen[0] is not None
    assert seen[0]["PATH"] == "/usr/local/bin:/usr/bin"
    assert seen[0]["NOW_TOKEN"] == "secret"


def test_now_cli_without_injected_env_inherits(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    seen: list[Mapping[str, str] | None] = []

    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cmd, cwd, timeout
        seen.append(env)
        return Ok("")

    monkeypatch.setattr(now_mod.shutil, "which", lambda _: "/usr/bin/npx")
    monkeypatch.setattr(now_mod, "run_process", fake_run)

    NowCli(cwd=tmp_path, console=MockConsole())([])

    assert seen == [None]
