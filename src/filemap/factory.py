"""Construction helpers wiring configuration into a file map."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from filemap.config import ConfigOverrides, load_effective_config
from filemap.index import FileMapIndex
from filemap.logging import JsonlChangeJournal
from filemap.models import FileMetaData


def create_file_map(
    root_dir: str,
    files: Mapping[str, FileMetaData] | None = None,
    *,
    config_dir: Path | None = None,
    overrides: ConfigOverrides | None = None,
) -> FileMapIndex:
    """Create a file map using config merged from filemap.toml and overrides."""
    config = load_effective_config(config_dir, overrides)
    journal = None
    if config.journal_enabled and config.journal_path is not None:
        journal = JsonlChangeJournal(config.journal_path)
    return FileMapIndex(root_dir, files, config=config, journal=journal)
