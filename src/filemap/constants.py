"""Record-field layout shared with the crawler that produces snapshots."""

from __future__ import annotations

from typing import Final

ID: Final[int] = 0
MTIME: Final[int] = 1
SIZE: Final[int] = 2
VISITED: Final[int] = 3
DEPENDENCIES: Final[int] = 4
SHA1: Final[int] = 5
SYMLINK: Final[int] = 6

RECORD_LENGTH: Final[int] = 7

DEPENDENCY_DELIM: Final[str] = "\0"
