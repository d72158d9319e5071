"""Local flat-file registry store.

One record per line, fields separated by NUL::

    <name>\\0<path>\\0<last_opened>\\0<kind>\\0<custom>\\n

``kind`` is ``directory`` for directory records and empty for workspaces.
Missing trailing fields parse as absent, and empty fields mean ``None``.
Lines without both a name and a path are skipped with a warning.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed over the target.  A crash mid-write leaves the previous file
intact.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from loguru import logger

from workspaces.models.enums import WorkspaceKind
from workspaces.models.workspace import WorkspaceRecord

FIELD_SEP = "\0"
RECORD_SEP = "\n"

_DIRECTORY_TAG = "directory"


class LocalRegistryStore:
    """Flat-file implementation of the RegistryStore protocol."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> list[WorkspaceRecord]:
        if not self._path.exists():
            logger.debug("Store: creating empty registry at {}", self._path)
            _atomic_write(self._path, "")
            return []
        return decode(self._path.read_text(encoding="utf-8"))

    def write(self, records: list[WorkspaceRecord]) -> None:
        _atomic_write(self._path, encode(records))
        logger.debug("Store: wrote {} record(s) to {}", len(records), self._path)


# -- Codec ---------------------------------------------------------------------


def encode_record(record: WorkspaceRecord) -> str:
    kind = _DIRECTORY_TAG if record.kind == WorkspaceKind.DIRECTORY else ""
    fields = (record.name, record.path, record.last_opened or "", kind, record.custom or "")
    return FIELD_SEP.join(fields) + RECORD_SEP


def encode(records: list[WorkspaceRecord]) -> str:
    return "".join(encode_record(r) for r in records)


def decode_line(line: str) -> WorkspaceRecord | None:
    """Parse one line.  Returns ``None`` for lines missing a name or path."""
    fields = line.split(FIELD_SEP)
    fields += [""] * (5 - len(fields))
    name, path, last_opened, kind, custom = fields[:5]
    if not name or not path:
        return None
    return WorkspaceRecord(
        name=name,
        path=path,
        kind=WorkspaceKind.DIRECTORY if kind == _DIRECTORY_TAG else WorkspaceKind.WORKSPACE,
        last_opened=last_opened or None,
        custom=custom or None,
    )


def decode(data: str) -> list[WorkspaceRecord]:
    records: list[WorkspaceRecord] = []
    for lineno, line in enumerate(data.split(RECORD_SEP), start=1):
        if not line:
            continue
        record = decode_line(line)
        if record is None:
            logger.warning("Store: skipping malformed line {}", lineno)
            continue
        records.append(record)
    return records


# -- Atomic write ---------------------------------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    The temp file is created in the same directory so ``os.replace`` is atomic
    on POSIX.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
