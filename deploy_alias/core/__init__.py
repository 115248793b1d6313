"""Core domain types and logic."""

from .config import (
    ConfigError,
    DeploymentTarget,
    Project,
    ProjectConfig,
    load_project,
    read_json,
)
from .errors import DeployError, ErrorCode, exit_code_for
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "DeploymentTarget",
    "Project",
    "ProjectConfig",
    "load_project",
    "read_json",
    # errors
    "DeployError",
    "ErrorCode",
    "exit_code_for",
    # result
    "Err",
    "Ok",
    "Result",
]
