"""Deployment services: branch detection, aliasing, status, orchestration."""

from .alias import branch_alias
from .branch import resolve_branch
from .deploy import DeploymentResult, DeployOrchestrator, DeployStep
from .now import DryRunNow, NowCli
from .status import DryRunStatus, GitHubStatusReporter

__all__ = [
    "branch_alias",
    "resolve_branch",
    "DeploymentResult",
    "DeployOrchestrator",
    "DeployStep",
    "DryRunNow",
    "NowCli",
    "DryRunStatus",
    "GitHubStatusReporter",
]
