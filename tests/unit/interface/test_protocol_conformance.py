from __future__ import annotations

import inspect

from filemap import FileMapIndex, FileSystem, MutableFileSystem, file_metadata


def _protocol_methods(protocol: type) -> set[str]:
    return {
        name
        for name, member in vars(protocol).items()
        if inspect.isfunction(member) and not name.startswith("_")
    }


def test_index_implements_every_protocol_method() -> None:
    expected = _protocol_methods(FileSystem) | _protocol_methods(MutableFileSystem)

    assert expected == {
        "add_or_modify",
        "bulk_add_or_modify",
        "exists",
        "get_absolute_file_iterator",
        "get_all_files",
        "get_dependencies",
        "get_file_iterator",
        "get_module_name",
        "get_real_path",
        "get_serializable_snapshot",
        "get_sha1",
        "get_size",
        "link_stats",
        "match_files",
        "match_files_with_context",
        "match_files_with_glob",
        "remove",
    }
    for name in expected:
        assert callable(getattr(FileMapIndex, name)), name


def _resolver_lookup(file_system: MutableFileSystem, path: str) -> list[str] | None:
    return file_system.get_dependencies(path)


def test_consumers_can_depend_on_protocol() -> None:
    index = FileMapIndex("/proj", {"a.js": file_metadata(mtime=1, dependencies=["b"])})

    assert _resolver_lookup(index, "/proj/a.js") == ["b"]
