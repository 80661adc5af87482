"""File system helpers."""

from __future__ import annotations

import os

from akiutils import errors

__all__ = ["remove"]


def remove(name: str | os.PathLike) -> None:
    """Remove a file or an empty directory; raise an error if that fails."""
    try:
        if os.path.isdir(name) and not os.path.islink(name):
            os.rmdir(name)
        else:
            os.remove(name)
    except OSError as exc:
        raise errors.new(f"couldn't remove file: {os.fspath(name)}") from exc