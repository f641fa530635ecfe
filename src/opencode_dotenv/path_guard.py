"""Path sandboxing for configured environment files.

A configuration document may only point the loader at files below the
user's home directory or the current working directory. The check is a
pure string computation: expand "~", anchor relative paths at cwd,
normalize "." and ".." segments, then require one of the two roots as a
prefix. No filesystem access happens here.
"""

import os
from typing import Any, NewType, Optional

ResolvedPath = NewType("ResolvedPath", str)


def expand_path(raw_path: str, home_dir: str, cwd: str) -> str:
    """Expand a leading "~" and return the normalized absolute path."""
    if raw_path.startswith("~"):
        raw_path = home_dir + raw_path[1:]
    return os.path.normpath(os.path.join(cwd, raw_path))


def resolve(raw_path: Any, home_dir: str, cwd: str) -> Optional[ResolvedPath]:
    """Return the normalized path if it lies within home_dir or cwd, else None.

    Example:
        >>> resolve("~/.env", "/home/me", "/work")
        '/home/me/.env'
        >>> resolve("~/../../../etc/passwd", "/home/me", "/work") is None
        True
    """
    if not isinstance(raw_path, str):
        return None

    normalized = expand_path(raw_path, home_dir, cwd)
    if normalized.startswith(home_dir) or normalized.startswith(cwd):
        return ResolvedPath(normalized)
    return None


class PathGuard:
    """Binds the allowed roots so call sites only pass the candidate path."""

    def __init__(self, home_dir: str, cwd: str) -> None:
        self.home_dir = home_dir
        self.cwd = cwd

    def resolve(self, raw_path: Any) -> Optional[ResolvedPath]:
        return resolve(raw_path, self.home_dir, self.cwd)

    def is_allowed(self, raw_path: Any) -> bool:
        return self.resolve(raw_path) is not None


__all__ = ["PathGuard", "ResolvedPath", "expand_path", "resolve"]
