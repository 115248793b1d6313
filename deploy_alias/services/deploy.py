"""Deployment orchestration.

A run deploys the project once with `now`, then decides which aliases to
assign to that deployment:

    release branch, no rules.json  -> production alias (now.json "alias")
    any other case                 -> branch alias
    release branch + rules.json    -> branch alias, then production alias
                                      through `now alias -r rules.json`

After every successful alias assignment a commit status is reported before
anything else happens. The first failure ends the run; aliases that were
already assigned are left in place.

The run is a small state machine:

    root_deployed -> production_aliased -> done
    root_deployed -> branch_aliased -> production_aliased -> done
    root_deployed | branch_aliased -> done   (nothing (more) to alias)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum

from deploy_alias.core.config import RULES_JSON, DeploymentTarget, ProjectConfig
from deploy_alias.core.errors import DeployError
from deploy_alias.core.fsm import StepHandler, StepOutcome, advance, finish, run_state_machine
from deploy_alias.core.result import Err, Ok, Result
from deploy_alias.output.console import ConsoleProtocol
from deploy_alias.services.alias import branch_alias
from deploy_alias.services.now import NowInvoker
from deploy_alias.services.status import StatusReporter

__all__ = [
    "DeployOrchestrator",
    "DeployRun",
    "DeployStep",
    "DeploymentResult",
]

BranchAliasFn = Callable[[str, str], str | None]


class DeployStep(StrEnum):
    ROOT_DEPLOYED = "root_deployed"
    BRANCH_ALIASED = "branch_aliased"
    PRODUCTION_ALIASED = "production_aliased"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class DeploymentResult:
    """What a run reports back.

    Attributes:
        name: Project name.
        root: URL of the unaliased deployment.
        url: Most recently assigned alias (root until one is assigned).
        alias: Branch alias, when one was assigned.
    """

    name: str
    root: str
    url: str
    alias: str | None = None

    def as_dict(self) -> dict[str, str]:
        out = {"name": self.name, "root": self.root}
        if self.alias is not None:
            out["alias"] = self.alias
        out["url"] = self.url
        return out


@dataclass(frozen=True, slots=True)
class DeployRun:
    step: DeployStep
    config: ProjectConfig
    target: DeploymentTarget
    rules_present: bool
    rules_path: str
    branch: str
    extra_args: tuple[str, ...]
    result: DeploymentResult

    @property
    def on_release_branch(self) -> bool:
        return self.branch == self.config.release_branch


class DeployOrchestrator:
    def __init__(
        self,
        *,
        now: NowInvoker,
        report_status: StatusReporter,
        console: ConsoleProtocol,
        branch_alias: BranchAliasFn = branch_alias,
    ) -> None:
        self._now = now
        self._report_status = report_status
        self._console = console
        self._branch_alias = branch_alias

    def run(
        self,
        config: ProjectConfig,
        target: DeploymentTarget,
        *,
        rules_present: bool,
        branch: str,
        extra_args: Sequence[str] = (),
        rules_path: str = RULES_JSON,
    ) -> Result[DeploymentResult, DeployError]:
        extra = tuple(extra_args)

        self._console.info(f'deploying "{config.name}" with now...')
        deployed = self._now(extra)
        if isinstance(deployed, Err):
            return deployed
        url = deployed.value
        if not url:
            return Err(
                DeployError(
                    kind="deploy_failed",
                    message=f"Unable to get deployment URL from now: {url!r}",
                )
            )
        self._console.print(f"root deployment: {url}")

        handlers: dict[str, StepHandler[DeployRun]] = {
            DeployStep.ROOT_DEPLOYED: self._alias_root,
            DeployStep.BRANCH_ALIASED: self._alias_staged,
            DeployStep.PRODUCTION_ALIASED: self._to_done,
            DeployStep.DONE: self._finish,
        }
        final = run_state_machine(
            initial_state=DeployRun(
                step=DeployStep.ROOT_DEPLOYED,
                config=config,
                target=target,
                rules_present=rules_present,
                rules_path=rules_path,
                branch=branch,
                extra_args=extra,
                result=DeploymentResult(name=config.name, root=url, url=url),
            ),
            get_step=lambda r: r.step,
            handlers=handlers,
        )
        return final.map(lambda r: r.result)

    def _alias_root(self, run: DeployRun) -> Result[StepOutcome[DeployRun], DeployError]:
        result = run.result

        if run.on_release_branch and not run.rules_present:
            prod_alias = run.target.alias
            if prod_alias is None:
                self._console.warning("no production alias configured; skipping alias")
                return Ok(advance(replace(run, step=DeployStep.DONE)))

            assigned = self._assign(run, ["alias", result.root, prod_alias], prod_alias)
            if isinstance(assigned, Err):
                return assigned
            return Ok(
                advance(
                    replace(
                        run,
                        step=DeployStep.PRODUCTION_ALIASED,
                        result=replace(result, url=prod_alias),
                    )
                )
            )

        alias = self._branch_alias(run.config.name, run.branch)
        if alias is None:
            self._console.warning(f'no alias for branch "{run.branch}"; skipping alias')
            return Ok(advance(replace(run, step=DeployStep.DONE)))

        assigned = self._assign(run, ["alias", result.root, alias], alias)
        if isinstance(assigned, Err):
            return assigned
        return Ok(
            advance(
                replace(
                    run,
                    step=DeployStep.BRANCH_ALIASED,
                    result=replace(result, url=alias, alias=alias),
                )
            )
        )

    def _alias_staged(self, run: DeployRun) -> Result[StepOutcome[DeployRun], DeployError]:
        if not (run.on_release_branch and run.rules_present):
            return Ok(advance(replace(run, step=DeployStep.DONE)))

        prod_alias = run.target.alias
        if prod_alias is None:
            self._console.warning(f"no production alias configured; skipping {run.rules_path}")
            return Ok(advance(replace(run, step=DeployStep.DONE)))
        if prod_alias == run.result.alias:
            self._console.print(
                f"already aliased to production URL: {prod_alias}; skipping {run.rules_path}"
            )
            return Ok(advance(replace(run, step=DeployStep.DONE)))

        assigned = self._assign(run, ["alias", "-r", run.rules_path, prod_alias], prod_alias)
        if isinstance(assigned, Err):
            return assigned
        return Ok(
            advance(
                replace(
                    run,
                    step=DeployStep.PRODUCTION_ALIASED,
                    result=replace(run.result, url=prod_alias),
                )
            )
        )

    def _to_done(self, run: DeployRun) -> Result[StepOutcome[DeployRun], DeployError]:
        return Ok(advance(replace(run, step=DeployStep.DONE)))

    def _finish(self, run: DeployRun) -> Result[StepOutcome[DeployRun], DeployError]:
        return Ok(finish(run))

    def _assign(self, run: DeployRun, args: list[str], alias: str) -> Result[None, DeployError]:
        """Point alias at the deployment, then report its status."""
        aliased = self._now([*run.extra_args, *args])
        if isinstance(aliased, Err):
            error = aliased.error
            if error.kind != "deploy_failed":
                return aliased
            return Err(
                DeployError(
                    kind="alias_failed",
                    message=f"failed to alias {alias}: {error.message}",
                    hint=error.hint,
                )
            )
        self._console.success(f"aliased: {alias}")

        return self._report_status(alias, run.config.status)
