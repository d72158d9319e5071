"""Shared test fixtures.

Every test runs from its own temporary directory with all ``WORKSPACES_*``
variables cleared and ``XDG_DATA_HOME`` pointing inside ``tmp_path``, so no
test can touch a real registry file.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

from workspaces.app import Workspaces
from workspaces.models.enums import CdType
from workspaces.settings import WorkspacesSettings, _get_settings_cached


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for key in list(os.environ):
        if key.startswith("WORKSPACES_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()
    # The CLI replaces loguru sinks; restore the default one.
    logger.remove()
    logger.add(sys.stderr)


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "workspaces" / "workspaces"


@pytest.fixture
def projects(tmp_path: Path) -> Path:
    """``projects/`` with two subfolders ``alpha`` and ``beta``."""
    root = tmp_path / "projects"
    (root / "alpha").mkdir(parents=True)
    (root / "beta").mkdir()
    return root


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


@pytest.fixture
def notifications() -> Iterator[list[tuple[str, str]]]:
    """Collect ``(level, message)`` for every user-visible notification."""
    messages: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda m: messages.append((m.record["level"].name, m.record["message"])),
        level="INFO",
        filter=lambda r: bool(r["extra"].get("notify")),
    )
    yield messages
    logger.remove(handler_id)


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


@pytest.fixture
def chdir_calls() -> list[tuple[str, CdType]]:
    return []


@pytest.fixture
def make_app(data_file: Path, chdir_calls: list[tuple[str, CdType]]) -> Callable[..., Workspaces]:
    """Build a facade on the temp data file; directory changes are recorded, not performed."""

    def _make(*, picker: Any = None, **settings: Any) -> Workspaces:
        settings.setdefault("path", data_file)
        return Workspaces(
            WorkspacesSettings(**settings),
            picker=picker,
            changer=lambda path, cd_type: chdir_calls.append((path, cd_type)),
        )

    return _make
