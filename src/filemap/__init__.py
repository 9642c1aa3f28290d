"""In-memory file map index for module resolution."""

from .config import ConfigOverrides, FileMapConfig, load_effective_config
from .errors import InvariantViolationError, UnsupportedOperationError, invariant
from .factory import create_file_map
from .globs import globs_to_matcher, replace_path_sep_for_glob
from .index import FileMapIndex
from .interface import FileSystem, MutableFileSystem
from .models import FileData, FileMapDelta, FileMetaData, FileStats, file_metadata

__all__ = [
    "ConfigOverrides",
    "FileData",
    "FileMapConfig",
    "FileMapDelta",
    "FileMapIndex",
    "FileMetaData",
    "FileStats",
    "FileSystem",
    "InvariantViolationError",
    "MutableFileSystem",
    "UnsupportedOperationError",
    "create_file_map",
    "file_metadata",
    "globs_to_matcher",
    "invariant",
    "load_effective_config",
    "replace_path_sep_for_glob",
]
