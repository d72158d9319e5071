"""Tests for hook normalization and dispatch."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

from workspaces.hooks import HookDispatcher
from workspaces.models.enums import HookPoint
from workspaces.models.hooks import CommandHook, FunctionHook, InvalidHook, normalize_hooks, to_hook
from workspaces.notify import Notifier


def _dispatcher(point: HookPoint, *hooks: Any) -> HookDispatcher:
    return HookDispatcher({point: normalize_hooks(list(hooks))}, Notifier())


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def test_to_hook_variants() -> None:
    def fn(name: str, path: str) -> None:
        return None

    assert isinstance(to_hook(fn), FunctionHook)
    assert to_hook("make") == CommandHook(command="make")
    assert to_hook(42) == InvalidHook(value=42)


def test_normalize_hooks_shapes() -> None:
    assert normalize_hooks(None) == []
    assert normalize_hooks("ls") == [CommandHook(command="ls")]
    assert normalize_hooks(["ls", "pwd"]) == [CommandHook(command="ls"), CommandHook(command="pwd")]


def test_normalize_keeps_existing_variants() -> None:
    hook = CommandHook(command="ls")
    assert normalize_hooks([hook])[0] is hook


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def test_hooks_run_in_order_with_name_and_path() -> None:
    calls: list[tuple[str, ...]] = []

    dispatcher = _dispatcher(
        HookPoint.OPEN,
        lambda name, path: calls.append(("first", name, path)),
        lambda name, path: calls.append(("second", name, path)),
    )

    assert dispatcher.run(HookPoint.OPEN, "proj", "/p") is True
    assert calls == [("first", "proj", "/p"), ("second", "proj", "/p")]


def test_state_is_passed_as_third_argument() -> None:
    seen: list[Any] = []
    dispatcher = _dispatcher(HookPoint.RENAME, lambda name, path, state: seen.append(state))

    dispatcher.run(HookPoint.RENAME, "new", "/p", {"previous_name": "old"})

    assert seen == [{"previous_name": "old"}]


def test_false_aborts_the_chain() -> None:
    calls: list[str] = []

    def veto(name: str, path: str) -> bool:
        calls.append("veto")
        return False

    dispatcher = _dispatcher(HookPoint.OPEN_PRE, veto, lambda name, path: calls.append("after"))

    assert dispatcher.run(HookPoint.OPEN_PRE, "proj", "/p") is False
    assert calls == ["veto"]


@pytest.mark.parametrize("result", [None, 0, "", True])
def test_only_false_aborts(result: Any) -> None:
    calls: list[str] = []
    dispatcher = _dispatcher(
        HookPoint.OPEN_PRE,
        lambda name, path: result,
        lambda name, path: calls.append("after"),
    )

    assert dispatcher.run(HookPoint.OPEN_PRE, "proj", "/p") is True
    assert calls == ["after"]


def test_no_hooks_configured() -> None:
    assert HookDispatcher({}, Notifier()).run(HookPoint.ADD, "proj", "/p") is True


def test_invalid_hook_is_reported_and_skipped(notifications: list[tuple[str, str]]) -> None:
    calls: list[str] = []
    dispatcher = _dispatcher(HookPoint.ADD, 42, lambda name, path: calls.append(name))

    assert dispatcher.run(HookPoint.ADD, "proj", "/p") is True
    assert calls == ["proj"]
    assert notifications == [("ERROR", "workspaces: invalid hook '42'")]


def test_function_hook_exception_propagates() -> None:
    def broken(name: str, path: str) -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        _dispatcher(HookPoint.OPEN, broken).run(HookPoint.OPEN, "proj", "/p")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell syntax")
def test_command_hook_receives_workspace_environment(tmp_path: Path) -> None:
    out = tmp_path / "env.txt"
    command = f'printf "%s|%s|%s" "$WORKSPACE_NAME" "$WORKSPACE_PATH" "$WORKSPACE_PREVIOUS_NAME" > "{out}"'

    _dispatcher(HookPoint.RENAME, command).run(HookPoint.RENAME, "new", "/p", {"previous_name": "old"})

    assert out.read_text() == "new|/p|old"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell syntax")
def test_failing_command_does_not_abort(tmp_path: Path) -> None:
    calls: list[str] = []
    dispatcher = _dispatcher(HookPoint.OPEN_PRE, "exit 3", lambda name, path: calls.append(name))

    assert dispatcher.run(HookPoint.OPEN_PRE, "proj", "/p") is True
    assert calls == ["proj"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell syntax")
def test_command_stdout_is_forwarded_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    _dispatcher(HookPoint.OPEN, "echo hook-output").run(HookPoint.OPEN, "proj", "/p")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hook-output" in captured.err
