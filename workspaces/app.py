"""Process-level facade over the registry.

``Workspaces`` wires settings, store, manager, hook dispatcher, notifier and
the transient current-workspace state together.  It is the boundary where
domain exceptions stop: every public method recovers from them with a
notification (or a silent no-op for implicit, cwd-based lookups) and returns
``None`` / ``False`` instead of raising.

The two host-specific collaborators are injected:

- ``picker(records) -> record | None`` chooses a workspace when ``open`` is
  called without a name;
- ``changer(path, cd_type)`` performs the directory change.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from loguru import logger

from workspaces.hooks import HookDispatcher
from workspaces.managers.directories import (
    DirectoryEmptyError,
    SyncResult,
    remove_directory,
    sync_directory,
)
from workspaces.managers.workspaces import (
    AlreadyRegisteredError,
    InvalidNameError,
    InvalidPathError,
    WorkspaceManager,
    WorkspaceNotFoundError,
)
from workspaces.models.enums import CdType, HookPoint, WorkspaceKind
from workspaces.models.workspace import WorkspaceRecord
from workspaces.notify import Notifier
from workspaces.settings import WorkspacesSettings, get_settings
from workspaces.state import WorkspaceState
from workspaces.store.base import RegistryStore
from workspaces.store.local import LocalRegistryStore

Picker = Callable[[list[WorkspaceRecord]], WorkspaceRecord | None]
DirectoryChanger = Callable[[str, CdType], None]


def change_directory(path: str, cd_type: CdType) -> None:
    """Default changer.  A standalone process has a single cwd for every scope."""
    logger.debug("Changing directory to {} (scope={})", path, cd_type)
    os.chdir(path)


class Workspaces:
    """Registry facade: add / remove / rename / list / open / sync."""

    def __init__(
        self,
        settings: WorkspacesSettings | None = None,
        *,
        store: RegistryStore | None = None,
        state: WorkspaceState | None = None,
        notifier: Notifier | None = None,
        picker: Picker | None = None,
        changer: DirectoryChanger | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store or LocalRegistryStore(self.settings.path)
        self.manager = WorkspaceManager(self.store, sort=self.settings.sort, mru_sort=self.settings.mru_sort)
        self.state = state or WorkspaceState()
        self.notifier = notifier or Notifier(info_enabled=self.settings.notify_info)
        self.hooks = HookDispatcher(self.settings.hooks, self.notifier)
        self.picker = picker
        self.changer = changer or change_directory

    # -- Create ----------------------------------------------------------------

    def add(self, path: str | None = None, name: str | None = None) -> WorkspaceRecord | None:
        """Register a workspace.  See ``resolve_add_target`` for argument rules."""
        record = self._add(path, name, WorkspaceKind.WORKSPACE)
        if record is None:
            return None
        self.notifier.info(f"workspace [{record.name} -> {record.path}] added")
        self.hooks.run(HookPoint.ADD, record.name, record.path)
        return record

    def add_dir(self, path: str | None = None, name: str | None = None) -> WorkspaceRecord | None:
        """Register a directory and its immediate subfolders as workspaces."""
        record = self._add(path, name, WorkspaceKind.DIRECTORY)
        if record is None:
            return None
        try:
            result = sync_directory(self.manager, record, strict=True)
        except DirectoryEmptyError:
            self.notifier.warn(f"directory '{record.name}' has no subfolders")
            return record
        self.notifier.info(f"directory [{record.name} -> {record.path}] added ({len(result.added)} workspaces)")
        return record

    def _add(self, path: str | None, name: str | None, kind: WorkspaceKind) -> WorkspaceRecord | None:
        try:
            return self.manager.add(path, name, kind)
        except (InvalidPathError, InvalidNameError) as exc:
            self.notifier.error(str(exc))
        except AlreadyRegisteredError:
            self.notifier.warn(f"{kind} is already registered")
        return None

    # -- Delete ----------------------------------------------------------------

    def remove(self, name: str | None = None) -> WorkspaceRecord | None:
        """Remove a workspace.  With no name, the cwd's workspace (if any)."""
        try:
            record = self.manager.remove(name)
        except WorkspaceNotFoundError:
            if name is not None:
                self.notifier.warn(f"workspace '{name}' does not exist")
            return None
        self.notifier.info(f"workspace [{record.name}] removed")
        self.hooks.run(HookPoint.REMOVE, record.name, record.path)
        return record

    def remove_dir(self, name: str | None = None) -> WorkspaceRecord | None:
        """Remove a directory and every workspace it currently contains."""
        try:
            directory, children = remove_directory(self.manager, name)
        except WorkspaceNotFoundError:
            if name is not None:
                self.notifier.warn(f"directory '{name}' does not exist")
            return None
        self.notifier.info(f"directory [{directory.name}] removed ({len(children)} workspaces)")
        return directory

    # -- Update ----------------------------------------------------------------

    def rename(self, name: str, new_name: str) -> WorkspaceRecord | None:
        try:
            record, previous = self.manager.rename(name, new_name)
        except WorkspaceNotFoundError:
            self.notifier.warn(f"workspace '{name}' does not exist")
            return None
        except AlreadyRegisteredError:
            self.notifier.warn(f"workspace '{new_name}' is already registered")
            return None
        except InvalidNameError as exc:
            self.notifier.error(str(exc))
            return None
        self.state.renamed(previous, record.name)
        self.notifier.info(f"workspace [{previous}] renamed to [{record.name}]")
        self.hooks.run(HookPoint.RENAME, record.name, record.path, {"previous_name": previous})
        return record

    def set_custom(self, name: str, data: str) -> bool:
        try:
            self.manager.set_custom(name, data)
        except WorkspaceNotFoundError:
            self.notifier.warn(f"workspace '{name}' does not exist")
            return False
        except InvalidNameError as exc:
            self.notifier.error(str(exc))
            return False
        return True

    def get_custom(self, name: str) -> str | None:
        try:
            return self.manager.get_custom(name)
        except WorkspaceNotFoundError:
            self.notifier.warn(f"workspace '{name}' does not exist")
            return None

    # -- Query -----------------------------------------------------------------

    def get(self) -> list[WorkspaceRecord]:
        """All workspace records, ordered by the configured policy."""
        return self.manager.by_kind(WorkspaceKind.WORKSPACE)

    def get_dirs(self) -> list[WorkspaceRecord]:
        return self.manager.by_kind(WorkspaceKind.DIRECTORY)

    def name(self) -> str | None:
        """Name of the workspace opened by this process, if any."""
        return self.state.name

    def path(self) -> str | None:
        return self.state.path

    # -- Open ------------------------------------------------------------------

    def open(self, name: str | None = None) -> bool:
        """Switch into a workspace.  Returns ``True`` when the open completed.

        ``open_pre`` hooks run first; if one returns ``False`` nothing else
        happens.  Otherwise ``last_opened`` is persisted, the directory is
        changed, the current workspace is set and ``open`` hooks run.
        """
        if name is None:
            if self.picker is None:
                self.notifier.error("open requires a workspace name")
                return False
            choice = self.picker(self.get())
            if choice is None:
                return False
            name = choice.name

        found = self.manager.find(name)
        if found is None:
            self.notifier.warn(f"workspace '{name}' does not exist")
            return False
        record, _ = found

        if not self.hooks.run(HookPoint.OPEN_PRE, record.name, record.path):
            logger.debug("Open of {} cancelled by an open_pre hook", record.name)
            return False

        try:
            record = self.manager.touch(record.name)
        except WorkspaceNotFoundError:
            self.notifier.warn(f"workspace '{record.name}' does not exist")
            return False

        self.changer(record.path, self.settings.cd_type)
        self.state.set(record)
        self.hooks.run(HookPoint.OPEN, record.name, record.path)
        return True

    def start(self) -> bool:
        """Auto-open the workspace registered for the current directory."""
        if not self.settings.auto_open:
            return False
        found = self.manager.find(path=os.getcwd())
        if found is None:
            return False
        return self.open(found[0].name)

    # -- Directories -----------------------------------------------------------

    def sync_dirs(self) -> list[SyncResult]:
        """Reconcile every directory's children with the filesystem.

        Individual adds and removes are silent and fire no hooks.
        """
        results: list[SyncResult] = []
        for directory in self.get_dirs():
            try:
                results.append(sync_directory(self.manager, directory, strict=True))
            except DirectoryEmptyError:
                self.notifier.warn(f"directory '{directory.name}' has no subfolders")
        return results
