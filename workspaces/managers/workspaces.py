"""Workspace record operations.

Encapsulates all registry data access: load (with ordering policy), find,
add, remove, rename and custom payload access.  Every write path loads the
full record list, mutates it in memory and rewrites the store in one piece.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import TYPE_CHECKING

from loguru import logger

from workspaces import paths
from workspaces.models.enums import WorkspaceKind
from workspaces.models.workspace import WorkspaceRecord

if TYPE_CHECKING:
    from workspaces.store.base import RegistryStore

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class WorkspaceNotFoundError(LookupError):
    """Raised when a name or path does not resolve to a record."""


class AlreadyRegisteredError(ValueError):
    """Raised when an add or rename collides with an existing record."""


class InvalidPathError(ValueError):
    """Raised when an add target is not a usable directory path."""


class InvalidNameError(ValueError):
    """Raised when a name or payload cannot be stored in the backing file."""


def now() -> str:
    """Local timestamp in the backing-file format."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def sort_records(records: list[WorkspaceRecord], *, mru: bool = False) -> list[WorkspaceRecord]:
    """Sort by name, or most-recently-opened first when ``mru`` is set.

    In MRU mode timestamped records come first (newest first), followed by
    records that were never opened, by name.
    """
    by_name = sorted(records, key=lambda r: r.name)
    if not mru:
        return by_name
    opened = [r for r in by_name if r.last_opened]
    never = [r for r in by_name if not r.last_opened]
    # Stable sort keeps name order among equal timestamps.
    opened.sort(key=lambda r: r.last_opened or "", reverse=True)
    return opened + never


def find_record(
    records: list[WorkspaceRecord],
    name: str | None = None,
    path: str | None = None,
    kind: WorkspaceKind = WorkspaceKind.WORKSPACE,
) -> tuple[WorkspaceRecord, int] | None:
    """Resolve a record by name, falling back to path equality.

    With neither ``name`` nor ``path`` the current directory is used (its
    basename as name, itself as path).  A ``name`` containing a separator is
    also tried as a path.  The returned index points into ``records``.
    """
    if name is None and path is None:
        path = os.getcwd()
        name = paths.basename(path)

    candidates = [(i, r) for i, r in enumerate(records) if r.kind == kind]

    if name is not None:
        for i, record in candidates:
            if record.name == name:
                return record, i

    target = path
    if target is None and name is not None and paths.looks_like_path(name):
        target = name
    if target is not None:
        normalized = paths.normalize_path(target)
        for i, record in candidates:
            if paths.normalize_path(record.path) == normalized:
                return record, i

    return None


def resolve_add_target(path: str | None, name: str | None) -> tuple[str, str]:
    """Fill in whichever of ``path`` / ``name`` is missing.

    - neither: the current directory and its basename
    - only ``name``: a path when it contains a separator, otherwise a name for
      the current directory
    - only ``path``: its basename as name
    - both: used as given, with the path made absolute
    """
    if path is None and name is None:
        path = os.getcwd()
        return paths.normalize_path(path), paths.basename(path)
    if path is None and name is not None:
        if paths.looks_like_path(name):
            return paths.normalize_path(name), paths.basename(name)
        return paths.normalize_path(os.getcwd()), name
    if name is None and path is not None:
        return paths.normalize_path(path), paths.basename(path)
    return paths.normalize_path(str(path)), str(name)


def validate_name(value: str, what: str = "name") -> None:
    if not value:
        msg = f"{what} must not be empty"
        raise InvalidNameError(msg)
    if paths.has_delimiter(value):
        msg = f"{what} '{value!r}' contains a NUL or newline character"
        raise InvalidNameError(msg)


def validate_directory(path: str) -> None:
    if paths.has_delimiter(path):
        msg = f"path {path!r} contains a NUL or newline character"
        raise InvalidPathError(msg)
    if not os.path.isdir(path):
        msg = f"path `{path}` does not exist"
        raise InvalidPathError(msg)


class WorkspaceManager:
    """Record operations over a registry store.

    Stateless beyond its store reference and ordering policy.  Methods raise
    domain exceptions; translating them into notifications is the facade's
    responsibility.
    """

    def __init__(self, store: RegistryStore, *, sort: bool = True, mru_sort: bool = True) -> None:
        self._store = store
        self._sort = sort
        self._mru_sort = mru_sort

    # -- Read ------------------------------------------------------------------

    def load(self) -> list[WorkspaceRecord]:
        """All records with the ordering policy applied."""
        records = self._store.read()
        if not self._sort:
            return records
        return sort_records(records, mru=self._mru_sort)

    def save(self, records: list[WorkspaceRecord]) -> None:
        self._store.write(records)

    def by_kind(self, kind: WorkspaceKind = WorkspaceKind.WORKSPACE) -> list[WorkspaceRecord]:
        return [r for r in self.load() if r.kind == kind]

    def find(
        self,
        name: str | None = None,
        path: str | None = None,
        kind: WorkspaceKind = WorkspaceKind.WORKSPACE,
    ) -> tuple[WorkspaceRecord, int] | None:
        return find_record(self.load(), name, path, kind)

    def get(self, name: str, kind: WorkspaceKind = WorkspaceKind.WORKSPACE) -> WorkspaceRecord:
        """Get a record by name or path.  Raises ``WorkspaceNotFoundError`` if missing."""
        found = self.find(name, kind=kind)
        if found is None:
            raise WorkspaceNotFoundError(name)
        return found[0]

    # -- Create ----------------------------------------------------------------

    def add(
        self,
        path: str | None = None,
        name: str | None = None,
        kind: WorkspaceKind = WorkspaceKind.WORKSPACE,
    ) -> WorkspaceRecord:
        """Register a directory.

        Raises ``InvalidPathError``, ``InvalidNameError`` or
        ``AlreadyRegisteredError``.
        """
        path, name = resolve_add_target(path, name)
        validate_directory(path)
        validate_name(name)

        records = self.load()
        self._check_unique(records, name, path, kind)

        record = WorkspaceRecord(name=name, path=path, kind=kind)
        records.append(record)
        self.save(records)
        logger.debug("Manager: added {} {} -> {}", kind, name, path)
        return record

    @staticmethod
    def _check_unique(
        records: list[WorkspaceRecord],
        name: str,
        path: str,
        kind: WorkspaceKind,
        *,
        ignore: WorkspaceRecord | None = None,
    ) -> None:
        for record in records:
            if record.kind != kind or record is ignore:
                continue
            if record.name == name or paths.same_path(record.path, path):
                raise AlreadyRegisteredError(name)

    # -- Delete ----------------------------------------------------------------

    def remove(
        self,
        name: str | None = None,
        kind: WorkspaceKind = WorkspaceKind.WORKSPACE,
    ) -> WorkspaceRecord:
        """Remove one record.  Raises ``WorkspaceNotFoundError`` if missing."""
        records = self.load()
        found = find_record(records, name, kind=kind)
        if found is None:
            raise WorkspaceNotFoundError(name if name is not None else os.getcwd())
        record, index = found
        del records[index]
        self.save(records)
        logger.debug("Manager: removed {} {}", kind, record.name)
        return record

    def remove_many(self, targets: list[WorkspaceRecord]) -> None:
        """Remove several records in a single rewrite.  Unknown records are ignored."""
        if not targets:
            return
        keys = {(t.kind, t.name) for t in targets}
        records = [r for r in self.load() if (r.kind, r.name) not in keys]
        self.save(records)

    # -- Update ----------------------------------------------------------------

    def rename(self, name: str, new_name: str) -> tuple[WorkspaceRecord, str]:
        """Rename a workspace.  Returns the updated record and its previous name.

        Raises ``WorkspaceNotFoundError``, ``InvalidNameError`` or
        ``AlreadyRegisteredError``.
        """
        validate_name(new_name)
        records = self.load()
        found = find_record(records, name)
        if found is None:
            raise WorkspaceNotFoundError(name)
        record, _ = found
        previous = record.name
        for other in records:
            if other is not record and other.kind == record.kind and other.name == new_name:
                raise AlreadyRegisteredError(new_name)
        record.name = new_name
        self.save(records)
        return record, previous

    def touch(self, name: str) -> WorkspaceRecord:
        """Stamp ``last_opened`` on a workspace and persist it."""
        records = self.load()
        found = find_record(records, name)
        if found is None:
            raise WorkspaceNotFoundError(name)
        record, _ = found
        record.last_opened = now()
        self.save(records)
        return record

    def set_custom(self, name: str, data: str) -> WorkspaceRecord:
        """Store ``data`` on a workspace.  An empty string clears it."""
        if paths.has_delimiter(data):
            msg = f"custom data {data!r} contains a NUL or newline character"
            raise InvalidNameError(msg)
        records = self.load()
        found = find_record(records, name)
        if found is None:
            raise WorkspaceNotFoundError(name)
        record, _ = found
        record.custom = data or None
        self.save(records)
        return record

    def get_custom(self, name: str) -> str | None:
        return self.get(name).custom
