"""User-facing notifications routed through ``logging``.

Hosts that want to surface messages in their own UI attach a handler to
the ``pi.bufferline`` logger.
"""

from __future__ import annotations

import logging
from typing import Literal

logger = logging.getLogger("pi.bufferline")

NotifyLevel = Literal["error", "warn", "info", "debug", "trace"]

TITLE = "Bufferline"

_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


class Notifier:
    """Emits notifications, optionally suppressing repeats."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger
        self._seen: set[tuple[int, str]] = set()

    def notify(
        self, msg: str | list[str], level: NotifyLevel = "info", *, once: bool = False
    ) -> bool:
        """Log *msg* at *level*. Returns ``False`` if suppressed as a repeat."""
        if isinstance(msg, list):
            msg = "\n".join(msg)
        log_level = _LEVELS.get(level.lower(), logging.INFO)
        if once:
            key = (log_level, msg)
            if key in self._seen:
                return False
            self._seen.add(key)
        self._logger.log(log_level, "[%s] %s", TITLE, msg)
        return True

    def reset(self) -> None:
        """Forget which one-off messages were already shown."""
        self._seen.clear()


_default_notifier: Notifier | None = None


def get_notifier() -> Notifier:
    global _default_notifier
    if _default_notifier is None:
        _default_notifier = Notifier()
    return _default_notifier


def set_notifier(notifier: Notifier) -> None:
    global _default_notifier
    _default_notifier = notifier


def notify(msg: str | list[str], level: NotifyLevel = "info", *, once: bool = False) -> bool:
    return get_notifier().notify(msg, level, once=once)
