"""Path flavor selection and fast root-relative helpers."""

from __future__ import annotations

import ntpath
import posixpath
import re
from types import ModuleType
from typing import Final, Literal, TypeAlias

PathFlavor: TypeAlias = Literal["auto", "posix", "windows"]

PATH_FLAVORS: Final[tuple[str, ...]] = ("auto", "posix", "windows")
WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


def is_windows_style(path: str) -> bool:
    """Return True for drive-letter or UNC absolute paths."""
    return bool(WINDOWS_ABSOLUTE_PATTERN.match(path)) or path.startswith("\\\\")


def path_module_for(root_dir: str, flavor: PathFlavor = "auto") -> ModuleType:
    """Return the os.path flavor used to interpret paths under root_dir."""
    if flavor == "posix":
        return posixpath
    if flavor == "windows":
        return ntpath
    if flavor != "auto":
        raise ValueError(f"Unknown path flavor: {flavor!r}. Allowed: {list(PATH_FLAVORS)}.")
    return ntpath if is_windows_style(root_dir) else posixpath


def path_separators(pathmod: ModuleType) -> tuple[str, ...]:
    """Return every separator the flavor accepts, primary first."""
    if pathmod.altsep:
        return (pathmod.sep, pathmod.altsep)
    return (pathmod.sep,)


def _root_prefix(pathmod: ModuleType, root: str) -> str:
    # Filesystem roots such as "/" or "C:\" already end with a separator.
    return root if root.endswith(pathmod.sep) else root + pathmod.sep


def fast_relative(pathmod: ModuleType, root: str, filename: str) -> str:
    """Return filename relative to root, stripping the prefix when possible."""
    prefix = _root_prefix(pathmod, root)
    if filename.startswith(prefix):
        relative = filename[len(prefix) :]
        if _has_parent_segment(pathmod, relative):
            return pathmod.normpath(relative)
        return relative
    try:
        return pathmod.relpath(filename, root)
    except ValueError:
        # No relative path between different drives.
        return filename


def _has_parent_segment(pathmod: ModuleType, relative: str) -> bool:
    if ".." not in relative:
        return False
    for sep in path_separators(pathmod)[1:]:
        relative = relative.replace(sep, pathmod.sep)
    return ".." in relative.split(pathmod.sep)


def fast_resolve(pathmod: ModuleType, root: str, relative: str) -> str:
    """Return the absolute path for a root-relative key."""
    if relative == ".." or relative.startswith(".." + pathmod.sep):
        return pathmod.normpath(pathmod.join(root, relative))
    return _root_prefix(pathmod, root) + relative
