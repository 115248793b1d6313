from __future__ import annotations

import pytest

from deploy_alias.services.branch import normalize_ref, resolve_branch


@pytest.mark.parametrize(
    ("ref", "expected"),
    [
        ("refs/heads/bar", "bar"),
        ("refs/heads/feature/x", "feature/x"),
        ("refs/tags/v1.2.0", "v1.2.0"),
        ("refs/pull/7/merge", "pull/7/merge"),
        ("main", "main"),
    ],
)
def test_normalize_ref(ref: str, expected: str) -> None:
    assert normalize_ref(ref) == expected


def test_resolve_branch_from_github_ref() -> None:
    env = {"GITHUB_REF": "refs/heads/bar"}
    assert resolve_branch(release_branch="master", env=env) == "bar"


def test_resolve_branch_defaults_to_release_branch_when_unset() -> None:
    assert resolve_branch(release_branch="master", env={}) == "master"


def test_resolve_branch_defaults_to_release_branch_when_empty() -> None:
    assert resolve_branch(release_branch="release", env={"GITHUB_REF": "  "}) == "release"


def test_resolve_branch_reads_process_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_REF", "refs/heads/v12")
    assert resolve_branch(release_branch="master") == "v12"
