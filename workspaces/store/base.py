"""Registry store interface.

The store owns the backing file and nothing else: it reads the full record
sequence and rewrites it in one piece.  Ordering, lookup and validation live
in the managers.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from workspaces.models.workspace import WorkspaceRecord


@runtime_checkable
class RegistryStore(Protocol):
    """Protocol for reading and writing the whole record sequence."""

    def read(self) -> list[WorkspaceRecord]:
        """Return records in stored order.  Creates an empty store if missing."""
        ...

    def write(self, records: list[WorkspaceRecord]) -> None:
        """Replace the stored sequence with ``records``."""
        ...
