"""In-process workspace state.

Tracks the workspace opened by this process.  Ephemeral -- empty on process
start, set only by a successful open.  All durable state lives in the
backing file.
"""

from __future__ import annotations

from loguru import logger

from workspaces.models.workspace import WorkspaceRecord


class WorkspaceState:
    """Current-workspace pointer shared by the facade and its hooks."""

    def __init__(self) -> None:
        self._current: WorkspaceRecord | None = None

    # -- Query -----------------------------------------------------------------

    @property
    def current(self) -> WorkspaceRecord | None:
        return self._current

    @property
    def name(self) -> str | None:
        return self._current.name if self._current else None

    @property
    def path(self) -> str | None:
        return self._current.path if self._current else None

    # -- Mutation --------------------------------------------------------------

    def set(self, record: WorkspaceRecord) -> None:
        logger.debug("State: current workspace is now {}", record.name)
        self._current = record.model_copy()

    def renamed(self, previous: str, new_name: str) -> None:
        """Follow a rename when it targets the current workspace."""
        if self._current is not None and self._current.name == previous:
            self._current.name = new_name
