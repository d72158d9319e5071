"""Directory records and their derived workspace children.

A directory record bookmarks a parent folder.  Its children are never stored
as pointers; they are recomputed on every query as the workspace records whose
parent path equals the directory's path.  ``sync_directory`` reconciles those
children against the immediate subfolders found on disk.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from loguru import logger

from workspaces import paths
from workspaces.managers.workspaces import WorkspaceManager, WorkspaceNotFoundError, find_record
from workspaces.models.enums import WorkspaceKind
from workspaces.models.workspace import WorkspaceRecord


class DirectoryEmptyError(LookupError):
    """Raised when a directory record's path has no subfolders."""


@dataclass
class SyncResult:
    """Changes applied to one directory's children."""

    directory: WorkspaceRecord
    added: list[WorkspaceRecord] = field(default_factory=list)
    removed: list[WorkspaceRecord] = field(default_factory=list)
    empty: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def scan_subdirectories(path: str) -> list[str]:
    """Normalized paths of the immediate subdirectories of ``path``.

    Symlinks are skipped, even when they point at a directory.

    Returns an empty list when ``path`` cannot be read.
    """
    base = paths.normalize_path(path)
    try:
        entries = list(os.scandir(base))
    except OSError as exc:
        logger.warning("Directories: cannot scan {}: {}", base, exc)
        return []
    return sorted(paths.normalize_path(e.path) for e in entries if e.is_dir(follow_symlinks=False))


def children_of(records: list[WorkspaceRecord], directory: WorkspaceRecord) -> list[WorkspaceRecord]:
    """Workspace records whose parent path is the directory's path."""
    dir_path = paths.normalize_path(directory.path)
    return [r for r in records if not r.is_directory and paths.parent(r.path) == dir_path]


def sync_directory(manager: WorkspaceManager, directory: WorkspaceRecord, *, strict: bool = False) -> SyncResult:
    """Reconcile one directory's children with the filesystem (diff by path).

    Subfolders without a registered workspace are added; registered children
    whose folder disappeared are removed.  Adds that collide with an existing
    workspace name or path are skipped silently.  Everything is written in a
    single rewrite of the store.

    With ``strict`` set, a directory without subfolders raises
    ``DirectoryEmptyError`` after its (now empty) children were reconciled.
    """
    records = manager.load()
    result = SyncResult(directory=directory)

    on_disk = scan_subdirectories(directory.path)
    result.empty = not on_disk
    on_disk_set = set(on_disk)

    current = children_of(records, directory)
    registered = {paths.normalize_path(c.path) for c in current}

    result.removed = [c for c in current if paths.normalize_path(c.path) not in on_disk_set]

    removed_ids = {id(c) for c in result.removed}
    kept = [r for r in records if id(r) not in removed_ids]

    others = [r for r in kept if r.kind == WorkspaceKind.WORKSPACE]
    taken_names = {r.name for r in others}
    taken_paths = {paths.normalize_path(r.path) for r in others}

    for sub in on_disk:
        if sub in registered:
            continue
        name = os.path.basename(sub)
        if name in taken_names or sub in taken_paths or paths.has_delimiter(sub):
            logger.debug("Directories: skipping {} (already registered)", sub)
            continue
        record = WorkspaceRecord(name=name, path=sub)
        kept.append(record)
        result.added.append(record)
        taken_names.add(name)
        taken_paths.add(sub)

    if result.changed:
        manager.save(kept)
        logger.debug(
            "Directories: synced {} (+{} -{})", directory.name, len(result.added), len(result.removed)
        )
    if strict and result.empty:
        raise DirectoryEmptyError(directory.name)
    return result


def sync_directories(manager: WorkspaceManager) -> list[SyncResult]:
    """Run ``sync_directory`` independently for every directory record."""
    return [sync_directory(manager, d) for d in manager.by_kind(WorkspaceKind.DIRECTORY)]


def remove_directory(
    manager: WorkspaceManager, name: str | None = None
) -> tuple[WorkspaceRecord, list[WorkspaceRecord]]:
    """Remove a directory record and all of its current children.

    Returns the directory and the removed children.  Raises
    ``WorkspaceNotFoundError`` if the directory does not resolve.
    """
    records = manager.load()
    found = find_record(records, name, kind=WorkspaceKind.DIRECTORY)
    if found is None:
        raise WorkspaceNotFoundError(name if name is not None else os.getcwd())
    directory, _ = found
    children = children_of(records, directory)
    manager.remove_many([*children, directory])
    return directory, children
