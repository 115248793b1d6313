"""Current branch detection from the CI environment."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

__all__ = ["REF_ENV_VAR", "normalize_ref", "resolve_branch"]

REF_ENV_VAR = "GITHUB_REF"

_REF_PREFIX = re.compile(r"^refs/(?:heads/|tags/)?")


def normalize_ref(ref: str) -> str:
    """Turn a git ref into a bare branch name.

    "refs/heads/feature/x" -> "feature/x", "refs/tags/v1" -> "v1",
    "refs/pull/7/merge" -> "pull/7/merge". Bare names pass through.
    """
    return _REF_PREFIX.sub("", ref.strip(), count=1)


def resolve_branch(*, release_branch: str, env: Mapping[str, str] | None = None) -> str:
    """Return the branch being deployed.

    Falls back to release_branch when no ref is available (local runs).
    """
    environ = os.environ if env is None else env
    ref = environ.get(REF_ENV_VAR, "")
    branch = normalize_ref(ref) if ref.strip() else ""
    return branch or release_branch
