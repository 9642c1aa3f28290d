from __future__ import annotations

from filemap import FileMapIndex, file_metadata


def _record(size: int = 10) -> list[object]:
    return file_metadata(module_name="Alpha", mtime=1000, size=size, sha1="ab" * 20)


def test_add_or_modify_normalizes_absolute_path() -> None:
    index = FileMapIndex("/proj")
    record = _record()

    index.add_or_modify("/proj/src/a.js", record)

    assert list(index.get_file_iterator()) == ["src/a.js"]
    assert index.exists("src/a.js")


def test_add_or_modify_resolves_dot_segments() -> None:
    index = FileMapIndex("/proj")

    index.add_or_modify("./src/lib/../a.js", _record())

    assert list(index.get_file_iterator()) == ["src/a.js"]


def test_absolute_path_with_parent_segment_shares_key_with_relative_path() -> None:
    index = FileMapIndex("/proj")

    index.add_or_modify("/proj/src/../a.js", _record(size=1))
    index.add_or_modify("a.js", _record(size=2))

    assert list(index.get_file_iterator()) == ["a.js"]
    assert len(index) == 1
    assert index.get_size("/proj/src/../a.js") == 2


def test_add_or_modify_overwrites_existing_record() -> None:
    index = FileMapIndex("/proj")
    index.add_or_modify("src/a.js", _record(size=1))
    index.add_or_modify("/proj/src/a.js", _record(size=2))

    assert len(index) == 1
    assert index.get_size("src/a.js") == 2


def test_bulk_add_or_modify_stores_keys_verbatim() -> None:
    index = FileMapIndex("/proj")
    first = _record(size=1)
    second = _record(size=2)

    index.bulk_add_or_modify({"src/a.js": first, "src/b.js": second})

    assert list(index.get_file_iterator()) == ["src/a.js", "src/b.js"]
    assert index.get_size("src/b.js") == 2


def test_bulk_add_or_modify_accepts_pairs_and_overwrites() -> None:
    index = FileMapIndex("/proj", {"src/a.js": _record(size=1)})

    index.bulk_add_or_modify([("src/a.js", _record(size=5)), ("src/c.js", _record(size=6))])

    assert index.get_size("src/a.js") == 5
    assert index.get_size("/proj/src/c.js") == 6


def test_remove_returns_record_once() -> None:
    record = _record()
    index = FileMapIndex("/proj", {"src/a.js": record})

    assert index.remove("/proj/src/a.js") is record
    assert index.exists("src/a.js") is False
    assert index.remove("src/a.js") is None
    assert index.remove("/proj/src/a.js") is None


def test_remove_unknown_path_leaves_map_unchanged() -> None:
    index = FileMapIndex("/proj", {"src/a.js": _record()})

    assert index.remove("src/missing.js") is None
    assert list(index.get_file_iterator()) == ["src/a.js"]


def test_constructor_copies_initial_mapping() -> None:
    files = {"src/a.js": _record()}
    index = FileMapIndex("/proj", files)

    index.add_or_modify("src/b.js", _record())
    files.clear()

    assert index.exists("src/a.js")
    assert len(index) == 2
