"""User-visible notifications.

Every failure the facade recovers from ends here.  Notifications are loguru
records with a ``workspaces:`` prefix; info-level ones can be silenced with
the ``notify_info`` setting.  They carry ``notify=True`` in their extra
fields so sinks can always show them regardless of the log level.
"""

from __future__ import annotations

from loguru import logger

PREFIX = "workspaces: "

_notify = logger.bind(notify=True)


class Notifier:
    def __init__(self, *, info_enabled: bool = True) -> None:
        self.info_enabled = info_enabled

    def info(self, message: str) -> None:
        if self.info_enabled:
            _notify.opt(depth=1).info(PREFIX + message)

    def warn(self, message: str) -> None:
        _notify.opt(depth=1).warning(PREFIX + message)

    def error(self, message: str) -> None:
        _notify.opt(depth=1).error(PREFIX + message)
