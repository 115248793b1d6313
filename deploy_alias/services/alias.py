"""Deterministic per-branch alias names.

    branch_alias("@primer/css", "v12")    -> "primer-css-v12.now.sh"
    branch_alias("primer-style", "master") -> "primer-style.now.sh"
"""

from __future__ import annotations

import re

__all__ = ["ALIAS_DOMAIN", "TRUNK_BRANCH", "branch_alias", "slugify"]

ALIAS_DOMAIN = "now.sh"
TRUNK_BRANCH = "master"

# Longest single DNS label.
_MAX_LABEL = 63

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    return _NON_SLUG.sub("-", text.lower()).strip("-")


def branch_alias(name: str, branch: str) -> str | None:
    """Return the alias for name deployed from branch, or None if there is none."""
    prefix = slugify(name.lstrip("@").replace("/", "-"))
    if not prefix:
        return None

    if branch == TRUNK_BRANCH:
        label = prefix
    else:
        branch_slug = slugify(branch)
        if not branch_slug:
            return None
        label = f"{prefix}-{branch_slug}"

    label = label[:_MAX_LABEL].rstrip("-")
    return f"{label}.{ALIAS_DOMAIN}"
