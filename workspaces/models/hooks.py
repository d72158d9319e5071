"""Hook variants.

Configuration accepts a callable, a command string, or a list of either for
each hook point.  ``normalize_hooks`` turns any of those shapes into a flat
list of tagged variants so dispatch never special-cases "single vs list".
Entries of any other type become ``InvalidHook``; they are reported and
skipped at dispatch time instead of failing configuration load.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class FunctionHook(BaseModel):
    """In-process callable, invoked as ``func(name, path[, state])``."""

    kind: Literal["function"] = "function"
    func: Callable[..., Any]


class CommandHook(BaseModel):
    """Shell command run as an opaque side effect."""

    kind: Literal["command"] = "command"
    command: str


class InvalidHook(BaseModel):
    """Configured value that is neither callable nor a string."""

    kind: Literal["invalid"] = "invalid"
    value: Any = None


Hook = Annotated[FunctionHook | CommandHook | InvalidHook, Field(discriminator="kind")]


def to_hook(value: Any) -> FunctionHook | CommandHook | InvalidHook:
    """Wrap a single raw configured value in its variant."""
    if isinstance(value, FunctionHook | CommandHook | InvalidHook):
        return value
    if isinstance(value, str):
        return CommandHook(command=value)
    if callable(value):
        return FunctionHook(func=value)
    return InvalidHook(value=value)


def normalize_hooks(value: Any) -> list[FunctionHook | CommandHook | InvalidHook]:
    """Normalize a hook, a list of hooks, or ``None`` to a list of variants."""
    if value is None:
        return []
    if isinstance(value, list | tuple):
        return [to_hook(v) for v in value]
    return [to_hook(value)]
