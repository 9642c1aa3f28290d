from __future__ import annotations

import pytest

from filemap import (
    FileMapIndex,
    InvariantViolationError,
    UnsupportedOperationError,
    file_metadata,
    invariant,
)
from filemap import constants as H


def test_invariant_passes_silently_when_condition_holds() -> None:
    invariant(True, "never raised")


def test_invariant_raises_assertion_subclass() -> None:
    with pytest.raises(AssertionError, match="broken contract"):
        invariant(0, "broken contract")


def test_get_real_path_is_unsupported_even_for_known_files() -> None:
    index = FileMapIndex("/proj", {"a.js": file_metadata(mtime=1)})

    with pytest.raises(UnsupportedOperationError, match="get_real_path"):
        index.get_real_path("a.js")
    with pytest.raises(NotImplementedError):
        index.get_real_path("/proj/missing.js")


def test_not_found_is_never_an_error() -> None:
    index = FileMapIndex("/proj")

    assert index.remove("a.js") is None
    assert index.link_stats("a.js") is None
    assert index.match_files(".*") == []
    assert index.match_files_with_glob(["**"]) == set()


def test_link_stats_rejects_non_numeric_mtime() -> None:
    record = file_metadata(size=1)
    record[H.MTIME] = "yesterday"
    index = FileMapIndex("/proj", {"a.js": record})

    with pytest.raises(InvariantViolationError):
        index.link_stats("a.js")
