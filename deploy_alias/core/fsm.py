from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from deploy_alias.core.errors import DeployError
from deploy_alias.core.result import Err, Ok, Result

S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class StepAdvance(Generic[S]):
    state: S


@dataclass(frozen=True, slots=True)
class StepFinish(Generic[S]):
    state: S


StepOutcome = StepAdvance[S] | StepFinish[S]
StepHandler = Callable[[S], Result[StepOutcome[S], DeployError]]
GetStep = Callable[[S], str]


def advance(state: S) -> StepAdvance[S]:
    return StepAdvance(state=state)


def finish(state: S) -> StepFinish[S]:
    return StepFinish(state=state)


def run_state_machine(
    *,
    initial_state: S,
    get_step: GetStep[S],
    handlers: Mapping[str, StepHandler[S]],
) -> Result[S, DeployError]:
    """Drive handlers one step at a time until one finishes or fails.

    Each handler runs only after the previous one returned Ok. The first Err
    is returned as-is.
    """
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            return Err(
                DeployError(
                    kind="invalid_config",
                    message=f"unknown deploy step: {step}",
                )
            )

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        if isinstance(outcome.value, StepFinish):
            return Ok(outcome.value.state)

        current = outcome.value.state
