"""Data models for the workspace registry."""

from workspaces.models.enums import CdType, HookPoint, WorkspaceKind
from workspaces.models.hooks import (
    CommandHook,
    FunctionHook,
    Hook,
    InvalidHook,
    normalize_hooks,
    to_hook,
)
from workspaces.models.workspace import WorkspaceRecord

__all__ = [
    "CdType",
    "CommandHook",
    "FunctionHook",
    "Hook",
    "HookPoint",
    "InvalidHook",
    "WorkspaceKind",
    "WorkspaceRecord",
    "normalize_hooks",
    "to_hook",
]
