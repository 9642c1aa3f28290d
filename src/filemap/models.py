"""Typed models for file map state."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, TypeAlias

from filemap import constants as H

FileMetaData: TypeAlias = list[object]
FileData: TypeAlias = dict[str, FileMetaData]
FileType: TypeAlias = Literal["f", "l"]


@dataclass(slots=True, frozen=True)
class FileStats:
    """Link-level stats for one known file."""

    file_type: FileType
    modified_time: int | float


@dataclass(slots=True, frozen=True)
class FileMapDelta:
    """Changed and removed entries relative to a fresh crawl."""

    changed_files: FileData
    removed_files: set[str]


def file_metadata(
    *,
    module_name: str | None = None,
    mtime: int | float | None = None,
    size: int = 0,
    visited: int = 0,
    dependencies: Sequence[str] | str | None = None,
    sha1: str | None = None,
    symlink: int | str = 0,
) -> FileMetaData:
    """Build a metadata record in the crawler's field layout."""
    if dependencies is not None and not isinstance(dependencies, str):
        dependencies = H.DEPENDENCY_DELIM.join(dependencies)
    record: FileMetaData = [None] * H.RECORD_LENGTH
    record[H.ID] = module_name
    record[H.MTIME] = mtime
    record[H.SIZE] = size
    record[H.VISITED] = visited
    record[H.DEPENDENCIES] = dependencies
    record[H.SHA1] = sha1
    record[H.SYMLINK] = symlink
    return record
