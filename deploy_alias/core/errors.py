"""Error records and exit codes.

`DeployError` is the single error value carried by every failed step.
`ErrorCode` maps error kinds to process exit codes for the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

__all__ = ["DeployError", "DeployErrorKind", "ErrorCode", "exit_code_for"]


DeployErrorKind = Literal[
    "deploy_failed",
    "alias_failed",
    "status_failed",
    "now_missing",
    "invalid_config",
]


@dataclass(frozen=True, slots=True)
class DeployError:
    kind: DeployErrorKind
    message: str
    hint: str | None = None


class ErrorCode(IntEnum):
    """Exit codes for the CLI.

    These values are used as process exit codes and should remain stable.
    - 0: Success
    - 1: User error (bad config files, invalid arguments)
    - 2: Environment error (npx/now missing)
    - 3: Deployment error (root deployment produced no URL)
    - 4: Alias error (an alias assignment failed)
    - 5: Status error (reporting a commit status failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    DEPLOY_ERROR = 3
    ALIAS_ERROR = 4
    STATUS_ERROR = 5


def exit_code_for(error: DeployError) -> ErrorCode:
    match error.kind:
        case "invalid_config":
            return ErrorCode.USER_ERROR
        case "now_missing":
            return ErrorCode.ENV_ERROR
        case "deploy_failed":
            return ErrorCode.DEPLOY_ERROR
        case "alias_failed":
            return ErrorCode.ALIAS_ERROR
        case "status_failed":
            return ErrorCode.STATUS_ERROR
