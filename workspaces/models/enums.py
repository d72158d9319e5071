"""Shared enumerations used across the registry."""

from __future__ import annotations

from enum import StrEnum

# -- Records -----------------------------------------------------------------


class WorkspaceKind(StrEnum):
    """Record namespace.  Names and paths are unique per kind."""

    WORKSPACE = "workspace"
    DIRECTORY = "directory"


# -- Open --------------------------------------------------------------------


class CdType(StrEnum):
    """Scope of the directory change performed on open."""

    GLOBAL = "global"
    LOCAL = "local"
    TAB = "tab"


# -- Hooks -------------------------------------------------------------------


class HookPoint(StrEnum):
    """Extension points where configured hooks run."""

    ADD = "add"
    REMOVE = "remove"
    RENAME = "rename"
    OPEN_PRE = "open_pre"
    OPEN = "open"
