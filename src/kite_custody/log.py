"""Per-client SDK logging.

Each client owns an ``SdkLogger`` with its own threshold. Messages go to a
sink callable ``(level, message)``; by default that is the stdlib logger
``kite_custody``.
"""

import logging
from typing import Callable, Literal, Optional

logger = logging.getLogger("kite_custody")

LogLevel = Literal["debug", "info", "warn", "error"]
LogSink = Callable[[str, str], None]

LOG_LEVELS: dict[str, int] = {
    "debug": 0,
    "info": 1,
    "warn": 2,
    "error": 3,
}

_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def stdlib_sink(level: str, message: str) -> None:
    """Forward an SDK message to the ``kite_custody`` stdlib logger."""
    logger.log(_STDLIB_LEVELS[level], f"[KiteSDK] {message}")


class SdkLogger:
    """Threshold-filtered logging capability held by a client instance.

    A message is emitted only when its severity is at or above the
    configured level (debug < info < warn < error).
    """

    def __init__(self, level: str = "info", sink: Optional[LogSink] = None):
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}"
            )
        self.level = level
        self.sink = sink or stdlib_sink

    def enabled(self, level: str) -> bool:
        return LOG_LEVELS[level] >= LOG_LEVELS[self.level]

    def __call__(self, level: str, message: str) -> None:
        if self.enabled(level):
            self.sink(level, message)

    def __repr__(self) -> str:
        return f"SdkLogger(level={self.level})"
