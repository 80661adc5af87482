"""Error values that carry the place where they were created."""

from __future__ import annotations

import inspect

__all__ = ["BasicStringError", "new"]


class BasicStringError(Exception):
    """An error made of a message and the file and line it came from."""

    def __init__(self, text: str, file: str | None = None, line: int | None = None):
        if file is None or line is None:
            caller_file, caller_line = _caller_location(2)
            file = caller_file if file is None else file
            line = caller_line if line is None else line
        self.text = str(text)
        self.file = str(file)
        self.line = int(line)
        super().__init__(self.error())

    def error(self) -> str:
        """Return the message prefixed with ``file:line``."""
        return f"{self.file}:{self.line} {self.text}"

    def __str__(self) -> str:
        return self.error()

    def __repr__(self) -> str:
        return f"BasicStringError({self.text!r}, {self.file!r}, {self.line!r})"


def _caller_location(depth: int) -> tuple[str, int]:
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None or frame.f_back is None:
                break
            frame = frame.f_back
        if frame is None:
            return "<unknown>", 0
        return frame.f_code.co_filename, frame.f_lineno
    finally:
        del frame


def new(text: str, file: str | None = None, line: int | None = None) -> BasicStringError:
    """Create an error; without ``file`` and ``line`` the caller's place is used."""
    if file is None or line is None:
        caller_file, caller_line = _caller_location(1)
        file = caller_file if file is None else file
        line = caller_line if line is None else line
    return BasicStringError(text, file, line)