"""Hook dispatch.

Runs the configured chain for one hook point, in order, on the calling
thread.  A function hook that returns exactly ``False`` aborts the rest of
the chain; the caller decides what an abort means (for ``open_pre`` it
cancels the whole open).  Command hooks cannot abort.  Invalid entries are
reported and skipped.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping
from typing import Any

from loguru import logger

from workspaces.models.enums import HookPoint
from workspaces.models.hooks import CommandHook, FunctionHook, InvalidHook
from workspaces.notify import Notifier


class HookDispatcher:
    """Runs hook chains from a normalized ``{HookPoint: [hook, ...]}`` mapping."""

    def __init__(
        self,
        hooks: Mapping[HookPoint, list[FunctionHook | CommandHook | InvalidHook]],
        notifier: Notifier,
    ) -> None:
        self._hooks = hooks
        self._notifier = notifier

    def chain(self, point: HookPoint) -> list[FunctionHook | CommandHook | InvalidHook]:
        return list(self._hooks.get(point, []))

    def run(self, point: HookPoint, name: str, path: str, state: dict[str, Any] | None = None) -> bool:
        """Run every hook for ``point``.  Returns ``False`` if a hook aborted the chain."""
        for index, hook in enumerate(self.chain(point)):
            if isinstance(hook, FunctionHook):
                result = hook.func(name, path) if state is None else hook.func(name, path, state)
                if result is False:
                    logger.debug("Hooks: {} chain aborted by hook #{}", point, index)
                    return False
            elif isinstance(hook, CommandHook):
                run_command(hook.command, name, path, state)
            else:
                self._notifier.error(f"invalid hook '{hook.value!r}'")
        return True


def run_command(command: str, name: str, path: str, state: dict[str, Any] | None = None) -> None:
    """Run a command hook through the shell.

    The workspace is exposed to the command as ``WORKSPACE_NAME`` /
    ``WORKSPACE_PATH`` (plus ``WORKSPACE_<KEY>`` for each state entry).  The
    exit status is logged, never returned.  Anything the command prints on
    stdout is forwarded to stderr so stdout stays reserved for CLI output.
    """
    env = dict(os.environ)
    env["WORKSPACE_NAME"] = name
    env["WORKSPACE_PATH"] = path
    for key, value in (state or {}).items():
        env[f"WORKSPACE_{key.upper()}"] = str(value)

    logger.debug("Hooks: running command {!r}", command)
    completed = subprocess.run(  # noqa: S602
        command, shell=True, env=env, check=False, stdout=subprocess.PIPE, text=True
    )
    if completed.stdout:
        sys.stderr.write(completed.stdout)
    if completed.returncode != 0:
        logger.warning("Hooks: command {!r} exited with status {}", command, completed.returncode)
