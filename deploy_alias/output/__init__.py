"""Log output for deploy runs (rich on stderr, or captured in tests)."""

from .console import (
    LOG_PREFIX,
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)

__all__ = [
    "LOG_PREFIX",
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
]
