"""Workspace record model.

A record is one line of the backing file: a named bookmark to a directory,
either a plain workspace or a directory whose immediate subfolders are
auto-registered as workspaces.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from workspaces.models.enums import WorkspaceKind


class WorkspaceRecord(BaseModel):
    """One registry entry."""

    name: str
    path: str
    kind: WorkspaceKind = WorkspaceKind.WORKSPACE
    last_opened: str | None = Field(default=None, description="Local timestamp of the last successful open")
    custom: str | None = Field(default=None, description="Opaque payload, never interpreted by the store")

    @property
    def is_directory(self) -> bool:
        return self.kind == WorkspaceKind.DIRECTORY
