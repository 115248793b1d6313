"""Typed project configuration loading.

A deployment is described by three optional files in the project directory:

- package.json: project name, plus deploy settings under the "@primer/deploy"
  key (releaseBranch, status); "deploy-alias" is read when that key is absent
- now.json: project name override and the production "alias"
- rules.json: its presence switches release-branch deploys to staged aliasing

All defaults are resolved here, once, and the results are frozen.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_KEY",
    "FALLBACK_CONFIG_KEY",
    "DEFAULT_RELEASE_BRANCH",
    "NOW_JSON",
    "PACKAGE_JSON",
    "RULES_JSON",
    "ConfigError",
    "DeploymentTarget",
    "Project",
    "ProjectConfig",
    "load_project",
    "read_json",
]

CONFIG_KEY = "@primer/deploy"
FALLBACK_CONFIG_KEY = "deploy-alias"
DEFAULT_RELEASE_BRANCH = "master"

PACKAGE_JSON = "package.json"
NOW_JSON = "now.json"
RULES_JSON = "rules.json"


def _empty_status() -> StrDict:
    return {}


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when a config file exists but cannot be parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Per-project deploy settings.

    Attributes:
        name: Project name used for branch aliases.
        release_branch: The only branch that gets the production alias.
        status: Options handed verbatim to the status reporter.
    """

    name: str
    release_branch: str = DEFAULT_RELEASE_BRANCH
    status: StrDict = field(default_factory=_empty_status)

    @classmethod
    def from_dict(
        cls,
        name: str,
        data: Mapping[str, object],
    ) -> ProjectConfig:
        """Create from the config table nested in package.json."""
        return cls(
            name=name,
            release_branch=get_str(data, "releaseBranch") or DEFAULT_RELEASE_BRANCH,
            status=get_table(data, "status") or {},
        )


@dataclass(frozen=True, slots=True)
class DeploymentTarget:
    """Production alias from now.json (None when not configured)."""

    alias: str | None = None


@dataclass(frozen=True, slots=True)
class Project:
    config: ProjectConfig
    target: DeploymentTarget
    rules_present: bool
    rules_path: str = RULES_JSON
    # Non-fatal problems found while loading, for the caller to log.
    warnings: tuple[str, ...] = ()


def read_json(path: Path) -> Result[object | None, ConfigError]:
    """Parse a JSON file.

    Returns:
        Ok(None) if the file does not exist, Ok(value) when parsed,
        Err(ConfigError) when it exists but is unreadable or invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Ok(None)
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading {path.name}: {e}", path=path))

    try:
        value: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON in {path.name}: {e}", path=path))
    return Ok(value)


def _read_table(path: Path, warnings: list[str]) -> Result[StrDict, ConfigError]:
    """Read a JSON object; anything else is treated as empty."""
    result = read_json(path)
    if isinstance(result, Err):
        return result
    if result.value is None:
        return Ok({})
    table = as_str_dict(result.value)
    if table is None:
        warnings.append(f"{path.name} is not a JSON object; ignoring it")
        return Ok({})
    return Ok(table)


def load_project(root: Path) -> Result[Project, ConfigError]:
    """Load the deploy configuration of the project in root.

    Name precedence: now.json "name", package.json "name", then the
    directory name.
    """
    warnings: list[str] = []
    now_json = _read_table(root / NOW_JSON, warnings)
    if isinstance(now_json, Err):
        return now_json
    package_json = _read_table(root / PACKAGE_JSON, warnings)
    if isinstance(package_json, Err):
        return package_json

    name = get_str(now_json.value, "name") or get_str(package_json.value, "name") or root.name
    settings = (
        get_table(package_json.value, CONFIG_KEY)
        or get_table(package_json.value, FALLBACK_CONFIG_KEY)
        or {}
    )

    return Ok(
        Project(
            config=ProjectConfig.from_dict(name, settings),
            target=DeploymentTarget(alias=get_str(now_json.value, "alias")),
            rules_present=(root / RULES_JSON).is_file(),
            warnings=tuple(warnings),
        )
    )
