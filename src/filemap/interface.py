"""Capability protocols other components depend on."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Protocol

from filemap.models import FileData, FileMetaData, FileStats


class FileSystem(Protocol):
    """Read-only query surface over an indexed file tree."""

    def exists(self, file: str) -> bool:
        """Return True when the path is known."""

    def get_module_name(self, file: str) -> str | None:
        """Return the declared module name, if any."""

    def get_size(self, file: str) -> int | None:
        """Return the byte size, if known."""

    def get_dependencies(self, file: str) -> list[str] | None:
        """Return dependency specifiers, or None for unknown files."""

    def get_sha1(self, file: str) -> str | None:
        """Return the content hash, if known."""

    def link_stats(self, file: str) -> FileStats | None:
        """Return file type and modified time, if known."""

    def get_all_files(self) -> list[str]:
        """Return every absolute path."""

    def get_file_iterator(self) -> Iterator[str]:
        """Iterate root-relative keys."""

    def get_absolute_file_iterator(self) -> Iterator[str]:
        """Iterate absolute paths."""

    def match_files(self, pattern: re.Pattern[str] | str) -> list[str]:
        """Return absolute paths matching a regular expression."""

    def match_files_with_context(
        self,
        root: str,
        *,
        recursive: bool,
        filter: re.Pattern[str] | str,
    ) -> list[str]:
        """Return absolute paths selected by a directory-scoped filter."""

    def match_files_with_glob(self, globs: Sequence[str], root: str | None = None) -> set[str]:
        """Return absolute paths matching any of the globs."""

    def get_serializable_snapshot(self) -> FileData:
        """Return a deep copy of the file map for external persistence."""

    def get_real_path(self, file: str) -> str:
        """Resolve symlinks; implementations may refuse."""


class MutableFileSystem(FileSystem, Protocol):
    """File system surface that also accepts change batches."""

    def add_or_modify(self, file: str, metadata: FileMetaData) -> None:
        """Insert or replace one record."""

    def bulk_add_or_modify(
        self,
        changed_files: Mapping[str, FileMetaData] | Iterable[tuple[str, FileMetaData]],
    ) -> None:
        """Insert or replace many records keyed by canonical paths."""

    def remove(self, file: str) -> FileMetaData | None:
        """Remove one record and return it."""
