"""In-memory file map over a crawled project snapshot."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence

from filemap import constants as H
from filemap.config import FileMapConfig
from filemap.errors import UnsupportedOperationError, invariant
from filemap.globs import globs_to_matcher, replace_path_sep_for_glob
from filemap.logging import ChangeEvent, ChangeJournal, summarize_metadata, utc_timestamp
from filemap.models import FileData, FileMapDelta, FileMetaData, FileStats
from filemap.paths import fast_relative, fast_resolve, path_module_for, path_separators

logger = logging.getLogger(__name__)

_CONTEXT_PREFIX = "./"


class FileMapIndex:
    """Answers structural and content queries over a snapshot of a file tree.

    Keys are paths relative to ``root_dir`` in the root's native separator
    convention. Every path-taking query accepts absolute or relative paths and
    first tries the path verbatim as a key, normalizing only on a miss.

    Mutation and iteration must not interleave: iterators and the pattern
    queries walk the live mapping.
    """

    __slots__ = ("_root_dir", "_files", "_path", "_seps", "_glob_dot", "_journal")

    def __init__(
        self,
        root_dir: str,
        files: Mapping[str, FileMetaData] | None = None,
        *,
        config: FileMapConfig | None = None,
        journal: ChangeJournal | None = None,
    ) -> None:
        config = config or FileMapConfig()
        pathmod = path_module_for(root_dir, config.path_flavor)
        if not pathmod.isabs(root_dir):
            raise ValueError(f"root_dir must be an absolute path: {root_dir!r}")
        self._path = pathmod
        self._seps = path_separators(pathmod)
        self._root_dir: str = pathmod.normpath(root_dir)
        self._files: FileData = dict(files) if files is not None else {}
        self._glob_dot = config.glob_dot
        self._journal = journal
        logger.debug("Initialized file map at %s with %d files", self._root_dir, len(self._files))

    @property
    def root_dir(self) -> str:
        """Return the absolute root all keys are relative to."""
        return self._root_dir

    def __len__(self) -> int:
        return len(self._files)

    def normalize_path(self, relative_or_absolute_path: str) -> str:
        """Return the canonical key for an absolute or relative path."""
        if self._path.isabs(relative_or_absolute_path):
            return fast_relative(self._path, self._root_dir, relative_or_absolute_path)
        return self._path.normpath(relative_or_absolute_path)

    # Mutation

    def add_or_modify(self, file: str, metadata: FileMetaData) -> None:
        """Insert or replace the record for one path."""
        normal_path = self.normalize_path(file)
        self._files[normal_path] = metadata
        if self._journal is not None:
            self._journal.write_batch(
                [_change_event("add_or_modify", normal_path, True, summarize_metadata(metadata))]
            )

    def bulk_add_or_modify(
        self,
        changed_files: Mapping[str, FileMetaData] | Iterable[tuple[str, FileMetaData]],
    ) -> None:
        """Insert or replace many records.

        Keys must already be canonical; they are stored as given. Records are
        applied one at a time, so a failure part way leaves earlier records
        applied.
        """
        items = changed_files.items() if isinstance(changed_files, Mapping) else changed_files
        applied: list[tuple[str, FileMetaData]] = []
        for relative_path, metadata in items:
            self._files[relative_path] = metadata
            applied.append((relative_path, metadata))
        logger.debug("Applied %d changed files", len(applied))
        if self._journal is not None:
            self._journal.write_batch(
                [
                    _change_event(
                        "bulk_add_or_modify", relative_path, True, summarize_metadata(metadata)
                    )
                    for relative_path, metadata in applied
                ]
            )

    def remove(self, file: str) -> FileMetaData | None:
        """Remove one record, returning it, or None when the path is unknown."""
        normal_path = self.normalize_path(file)
        metadata = self._files.pop(normal_path, None)
        if self._journal is not None:
            self._journal.write_batch(
                [
                    _change_event(
                        "remove", normal_path, metadata is not None, summarize_metadata(metadata)
                    )
                ]
            )
        return metadata

    # Point queries

    def exists(self, file: str) -> bool:
        """Return True when the path is known."""
        return self._get_file_data(file) is not None

    def get_module_name(self, file: str) -> str | None:
        """Return the declared module name, if any."""
        metadata = self._get_file_data(file)
        if metadata is None:
            return None
        return metadata[H.ID]  # type: ignore[return-value]

    def get_size(self, file: str) -> int | None:
        """Return the byte size, if known."""
        metadata = self._get_file_data(file)
        if metadata is None:
            return None
        return metadata[H.SIZE]  # type: ignore[return-value]

    def get_sha1(self, file: str) -> str | None:
        """Return the content hash, if known."""
        metadata = self._get_file_data(file)
        if metadata is None:
            return None
        return metadata[H.SHA1]  # type: ignore[return-value]

    def get_dependencies(self, file: str) -> list[str] | None:
        """Return dependency specifiers in stored order.

        Unknown files give None; known files without dependencies give [].
        """
        metadata = self._get_file_data(file)
        if metadata is None:
            return None
        dependencies = metadata[H.DEPENDENCIES]
        if not dependencies:
            return []
        return dependencies.split(H.DEPENDENCY_DELIM)  # type: ignore[union-attr]

    def link_stats(self, file: str) -> FileStats | None:
        """Return file type and modified time, if known."""
        metadata = self._get_file_data(file)
        if metadata is None:
            return None
        file_type = "f" if metadata[H.SYMLINK] == 0 else "l"
        modified_time = metadata[H.MTIME]
        invariant(
            isinstance(modified_time, (int, float)) and not isinstance(modified_time, bool),
            f"File in file map missing modified time: {file}",
        )
        return FileStats(file_type=file_type, modified_time=modified_time)  # type: ignore[arg-type]

    # Iteration and snapshot

    def get_all_files(self) -> list[str]:
        """Return every absolute path in insertion order."""
        return list(self.get_absolute_file_iterator())

    def get_file_iterator(self) -> Iterator[str]:
        """Return a fresh single-pass iterator over canonical keys."""
        return iter(self._files)

    def get_absolute_file_iterator(self) -> Iterator[str]:
        """Yield absolute paths in insertion order."""
        pathmod = self._path
        root_dir = self._root_dir
        for file in self._files:
            yield fast_resolve(pathmod, root_dir, file)

    def get_serializable_snapshot(self) -> FileData:
        """Return a copy of the file map that later mutation cannot affect."""
        return {key: list(metadata) for key, metadata in self._files.items()}

    def get_difference(self, files: Mapping[str, FileMetaData]) -> FileMapDelta:
        """Compare a fresh crawl against the map without mutating it."""
        changed_files: FileData = dict(files)
        removed_files: set[str] = set()
        for normal_path, metadata in self._files.items():
            new_metadata = files.get(normal_path)
            if new_metadata is None:
                removed_files.add(normal_path)
                continue
            if (new_metadata[H.SYMLINK] == 0) != (metadata[H.SYMLINK] == 0):
                continue
            new_mtime = new_metadata[H.MTIME]
            if new_mtime and new_mtime == metadata[H.MTIME]:
                del changed_files[normal_path]
            elif (
                new_metadata[H.SHA1] is not None
                and new_metadata[H.SHA1] == metadata[H.SHA1]
                and metadata[H.VISITED] == 1
            ):
                # Same content: keep module name and dependencies, refresh mtime.
                updated = list(metadata)
                updated[H.MTIME] = new_mtime
                changed_files[normal_path] = updated
        return FileMapDelta(changed_files=changed_files, removed_files=removed_files)

    # Pattern queries

    def match_files(self, pattern: re.Pattern[str] | str) -> list[str]:
        """Return absolute paths the regular expression finds a match in."""
        regexp = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
        return [file for file in self.get_absolute_file_iterator() if regexp.search(file)]

    def match_files_with_context(
        self,
        root: str,
        *,
        recursive: bool,
        filter: re.Pattern[str] | str,
    ) -> list[str]:
        """Return absolute paths under root selected by a module-context filter.

        The filter is tested against ``./``-prefixed, forward-slash relative
        paths, for example ``a/b.js`` -> ``./a/b.js``.
        """
        regexp = filter if isinstance(filter, re.Pattern) else re.compile(filter)
        pathmod = self._path
        parent = ".."
        parent_prefix = parent + pathmod.sep
        seps = self._seps
        files: list[str] = []
        for file in self.get_absolute_file_iterator():
            file_path = fast_relative(pathmod, root, file)
            # Ignore the root itself and everything outside of it.
            if (
                not file_path
                or file_path == pathmod.curdir
                or file_path == parent
                or file_path.startswith(parent_prefix)
                or pathmod.isabs(file_path)
            ):
                continue
            if not recursive and any(sep in file_path for sep in seps):
                continue
            if regexp.search(_CONTEXT_PREFIX + file_path.replace("\\", "/")):
                files.append(file)
        return files

    def match_files_with_glob(self, globs: Sequence[str], root: str | None = None) -> set[str]:
        """Return absolute paths matching any glob.

        Subjects are absolute paths, or paths relative to ``root`` when given.
        """
        matcher = globs_to_matcher(globs, dot=self._glob_dot)
        pathmod = self._path
        files: set[str] = set()
        for file in self.get_absolute_file_iterator():
            file_path = fast_relative(pathmod, root, file) if root is not None else file
            if matcher(replace_path_sep_for_glob(file_path)):
                files.add(file)
        return files

    def get_real_path(self, file: str) -> str:
        """Symlink resolution is not available from the file map."""
        raise UnsupportedOperationError("FileMapIndex.get_real_path() is not implemented.")

    def _get_file_data(self, file: str) -> FileMetaData | None:
        # Callers usually pass canonical keys; skip normalization when they do.
        metadata = self._files.get(file)
        if metadata is not None:
            return metadata
        return self._files.get(self.normalize_path(file))


def _change_event(
    operation: str, path: str, ok: bool, metadata: dict[str, object]
) -> ChangeEvent:
    return ChangeEvent(
        timestamp=utc_timestamp(),
        operation=operation,
        path=path,
        ok=ok,
        metadata=metadata,
    )
