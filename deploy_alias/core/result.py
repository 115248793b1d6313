"""Result type for explicit error handling.

Every step of a deployment (running `now`, assigning an alias, posting a
commit status) can fail. Instead of raising, those steps return a Result so
the orchestrator can stop at the first failure and hand it back unchanged.

Usage:
    def deploy_root(args: list[str]) -> Result[str, DeployError]:
        url = ...
        if not url:
            return Err(DeployError(kind="deploy_failed", message="no URL"))
        return Ok(url)

    match deploy_root([]):
        case Ok(url):
            print(f"root deployment: {url}")
        case Err(error):
            print(f"failed: {error.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Applies f to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """Returns self unchanged (no value to map)."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]

