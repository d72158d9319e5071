"""Registry store implementations."""

from workspaces.store.base import RegistryStore
from workspaces.store.local import LocalRegistryStore

__all__ = ["LocalRegistryStore", "RegistryStore"]
