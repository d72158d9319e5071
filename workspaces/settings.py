"""Registry configuration loaded from WORKSPACES_* environment variables."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workspaces.models.enums import CdType, HookPoint
from workspaces.models.hooks import Hook, normalize_hooks


def default_data_path() -> Path:
    """``$XDG_DATA_HOME/workspaces/workspaces`` (``~/.local/share`` when unset)."""
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(data_home) / "workspaces" / "workspaces"


class WorkspacesSettings(BaseSettings):
    """Workspace registry settings.

    All fields are read from environment variables with the ``WORKSPACES_``
    prefix.  For example, ``WORKSPACES_CD_TYPE=tab`` maps to ``cd_type``.
    ``WORKSPACES_HOOKS`` takes JSON, e.g. ``{"open": ["git fetch", "make"]}``.

    Library callers can pass callables as hooks directly::

        WorkspacesSettings(hooks={"open": [load_session, "git status"]})
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKSPACES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"

    # -- Storage ---------------------------------------------------------------
    path: Path = Field(default_factory=default_data_path)
    """Backing file holding the registry."""

    # -- Open ------------------------------------------------------------------
    cd_type: CdType = CdType.GLOBAL
    global_cd: bool | None = None
    """Legacy switch superseded by ``cd_type``: true -> global, false -> local."""

    auto_open: bool = False
    """Open the workspace registered for the start-up directory, if any."""

    # -- Listing ---------------------------------------------------------------
    sort: bool = True
    mru_sort: bool = True
    """Most-recently-opened first.  Only applies when ``sort`` is enabled."""

    # -- Notifications ---------------------------------------------------------
    notify_info: bool = True

    # -- Hooks -----------------------------------------------------------------
    hooks: dict[HookPoint, list[Hook]] = Field(default_factory=dict)

    @field_validator("hooks", mode="before")
    @classmethod
    def _normalize_hooks(cls, value: Any) -> Any:
        """Accept a single hook or a list of hooks per point."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        return {point: normalize_hooks(hooks) for point, hooks in value.items()}

    @model_validator(mode="after")
    def _apply_legacy_global_cd(self) -> WorkspacesSettings:
        if self.global_cd is not None and "cd_type" not in self.model_fields_set:
            self.cd_type = CdType.GLOBAL if self.global_cd else CdType.LOCAL
        return self


def get_settings() -> WorkspacesSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> WorkspacesSettings:
    return WorkspacesSettings()

