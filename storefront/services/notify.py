from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List

logger = logging.getLogger(__name__)

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"
INFO = "info"

_LOG_LEVELS = {
    SUCCESS: logging.INFO,
    INFO: logging.INFO,
    WARNING: logging.WARNING,
    ERROR: logging.ERROR,
}

HISTORY_SIZE = 200

ICONS = {
    SUCCESS: "✅",
    INFO: "ℹ️",
    WARNING: "⚠️",
    ERROR: "❌",
}


@dataclass(frozen=True)
class Notification:
    level: str
    text: str

    def __str__(self) -> str:
        return f"{ICONS.get(self.level, '')} {self.text}".strip()


Listener = Callable[[Notification], None]


class Notifier:
    """
    Global transient message surface.
    Stores push here; the shell drains pending messages after each action.
    """

    def __init__(self) -> None:
        self.history: Deque[Notification] = deque(maxlen=HISTORY_SIZE)
        self._pending: List[Notification] = []
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def notify(self, level: str, text: str) -> Notification:
        n = Notification(level, text)
        logger.log(_LOG_LEVELS.get(level, logging.INFO), "notify[%s]: %s", level, text)
        self.history.append(n)
        self._pending.append(n)
        for listener in self._listeners:
            listener(n)
        return n

    def success(self, text: str) -> Notification:
        return self.notify(SUCCESS, text)

    def warning(self, text: str) -> Notification:
        return self.notify(WARNING, text)

    def error(self, text: str) -> Notification:
        return self.notify(ERROR, text)

    def info(self, text: str) -> Notification:
        return self.notify(INFO, text)

    def drain(self) -> List[Notification]:
        out, self._pending = self._pending, []
        return out

    def of_level(self, level: str) -> List[Notification]:
        return [n for n in self.history if n.level == level]
