"""Message types and a logger that writes to a terminal."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone
from enum import IntEnum
from typing import TextIO

__all__ = [
    "LoggerMSGType",
    "Logger",
    "TerminalLogger",
    "icon_by_type",
    "string_for_type",
    "timestamp",
]


class LoggerMSGType(IntEnum):
    """Kind of a log message."""

    STATUS = 0
    TEXT = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    FAILURE = 5
    EXPECTED_FAILURE = 6
    SUCCESS = 7
    UNEXPECTED_SUCCESS = 8
    TODO = 9
    FIXME = 10


_ICONS = {
    LoggerMSGType.TEXT: "   ",
    LoggerMSGType.STATUS: "---",
    LoggerMSGType.INFO: " i ",
    LoggerMSGType.WARNING: " ! ",
    LoggerMSGType.ERROR: " e ",
    LoggerMSGType.FAILURE: " f ",
    LoggerMSGType.SUCCESS: " s ",
    LoggerMSGType.EXPECTED_FAILURE: " / ",
    LoggerMSGType.UNEXPECTED_SUCCESS: " u ",
    LoggerMSGType.TODO: "Do!",
    LoggerMSGType.FIXME: "Fix",
}

_NAMES = {
    LoggerMSGType.TEXT: "",
    LoggerMSGType.STATUS: "status",
    LoggerMSGType.INFO: "info",
    LoggerMSGType.WARNING: "!warning!",
    LoggerMSGType.ERROR: "!!error!!",
    LoggerMSGType.FAILURE: "failure",
    LoggerMSGType.SUCCESS: "success",
    LoggerMSGType.EXPECTED_FAILURE: "expected failure",
    LoggerMSGType.UNEXPECTED_SUCCESS: "unexpected failure",
    LoggerMSGType.TODO: "todo",
    LoggerMSGType.FIXME: "fixme",
}


def _lookup(table: dict, t, default: str) -> str:
    try:
        return table.get(LoggerMSGType(t), default)
    except ValueError:
        return default


def icon_by_type(t) -> str:
    """Return the three-character icon for a message type."""
    return _lookup(_ICONS, t, " ? ")


def string_for_type(t) -> str:
    """Return the word used for a message type."""
    return _lookup(_NAMES, t, "undefined")


def timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.ffffffz``."""
    now = datetime.now(timezone.utc)
    return f"{now:%Y-%m-%d}T{now:%H:%M:%S.%f}z"


class Logger(ABC):
    """Interface of loggers."""

    @abstractmethod
    def log(self, t, msg: str | None = None) -> None:
        """Log one message of type ``t``."""

    @abstractmethod
    def log_all(self, t, msgs: Iterable[str]) -> None:
        """Log each message of ``msgs``."""

    @abstractmethod
    def log_split_lines(self, t, msg: str) -> None:
        """Log every line of ``msg`` as its own message."""


class TerminalLogger(Logger):
    """Logger that prints each message as one line."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def log(self, t, msg: str | None = None) -> None:
        text = string_for_type(t) if msg is None else msg
        print(f"[{icon_by_type(t)}] [{timestamp()}] {text}", file=self.stream, flush=True)

    def log_all(self, t, msgs: Iterable[str]) -> None:
        for msg in msgs:
            self.log(t, msg)

    def log_split_lines(self, t, msg: str) -> None:
        self.log_all(t, msg.splitlines())