from __future__ import annotations

import re

import pytest

from filemap import FileMapIndex, file_metadata


def _index() -> FileMapIndex:
    return FileMapIndex(
        "/proj",
        {
            "src/a.js": file_metadata(mtime=1),
            "src/sub/b.js": file_metadata(mtime=2),
            "src/readme.md": file_metadata(mtime=3),
            "other/c.js": file_metadata(mtime=4),
            "srcfoo/d.js": file_metadata(mtime=5),
        },
    )


def test_non_recursive_context_only_includes_direct_children() -> None:
    hits = _index().match_files_with_context(
        "/proj/src", recursive=False, filter=re.compile(r"^\./[^/]+\.js$")
    )

    assert hits == ["/proj/src/a.js"]


def test_recursive_context_includes_nested_files() -> None:
    hits = _index().match_files_with_context(
        "/proj/src", recursive=True, filter=re.compile(r"^\./.*\.js$")
    )

    assert hits == ["/proj/src/a.js", "/proj/src/sub/b.js"]


def test_context_subjects_start_with_dot_slash() -> None:
    hits = _index().match_files_with_context("/proj/src", recursive=True, filter=r"^\./sub/")

    assert hits == ["/proj/src/sub/b.js"]


def test_context_excludes_files_outside_root() -> None:
    hits = _index().match_files_with_context("/proj/src", recursive=True, filter=r".*")

    assert "/proj/other/c.js" not in hits
    assert "/proj/srcfoo/d.js" not in hits
    assert len(hits) == 3


def test_context_root_independent_of_index_root() -> None:
    hits = _index().match_files_with_context("/", recursive=True, filter=r"^\./proj/other/")

    assert hits == ["/proj/other/c.js"]


def test_context_excludes_the_root_itself() -> None:
    index = FileMapIndex("/proj", {"src": file_metadata(mtime=1)})

    assert index.match_files_with_context("/proj/src", recursive=True, filter=r".*") == []


def test_context_keeps_names_starting_with_two_dots() -> None:
    index = FileMapIndex("/proj", {"src/..hidden.js": file_metadata(mtime=1)})

    hits = index.match_files_with_context("/proj/src", recursive=False, filter=r"\.js$")

    assert hits == ["/proj/src/..hidden.js"]


def test_context_propagates_invalid_filter() -> None:
    with pytest.raises(re.error):
        _index().match_files_with_context("/proj", recursive=True, filter="[")
