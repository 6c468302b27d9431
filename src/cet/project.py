"""Project file discovery for multi-file compiles.

Compiler Explorer resolves ``@import("foo.zig")`` / ``#include "foo.h"``
against the extra ``files`` of a request, named relative to the main
source. This module collects those siblings from disk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from .api.models import FileEntry
from .config import DEFAULT_EXCLUDED_NAMES, DEFAULT_SKIP_DIRS

_LOGGER = logging.getLogger(__name__)

_LANGUAGE_BY_EXTENSION: dict[str, str] = {
    ".zig": "zig",
    ".c": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".rs": "rust",
    ".go": "go",
    ".py": "python",
}


def language_for_path(path: Path | str) -> str:
    """Return the highlighter language for ``path``, or ``""`` if unknown."""
    return _LANGUAGE_BY_EXTENSION.get(Path(path).suffix.lower(), "")


def _walk(directory: Path, skip_dirs: frozenset[str]) -> Iterator[Path]:
    # Lexical order, directories descended in place; symlinked dirs are not followed.
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name in skip_dirs:
                continue
            yield from _walk(Path(entry.path), skip_dirs)
        else:
            yield Path(entry.path)


def collect_project_files(
    search_dir: Path,
    main_file: Path,
    relative_to: Path,
    *,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    excluded_names: Iterable[str] = DEFAULT_EXCLUDED_NAMES,
) -> list[FileEntry]:
    """Gather every source file under ``search_dir`` sharing ``main_file``'s extension.

    Args:
        search_dir: Directory to walk (the ``--root`` option, or the main file's directory).
        main_file: Absolute path of the main source; it is never included.
        relative_to: Directory the returned filenames are relative to,
            usually the main file's directory. Files above it come back as
            ``../lib/util.zig``.
        skip_dirs: Directory names that are not descended into. This applies
            to ``search_dir`` itself, so a root named ``target`` yields nothing.
        excluded_names: File names that are never sent (e.g. ``build.zig``).

    Returns:
        FileEntry list in walk order.

    Raises:
        OSError: If a directory cannot be listed or a file cannot be read.
    """
    extension = main_file.suffix
    skip = frozenset(skip_dirs)
    excluded = frozenset(excluded_names)
    files: list[FileEntry] = []

    if search_dir.name in skip and search_dir.is_dir():
        _LOGGER.debug("Search root %s is in the skip list", search_dir)
        return files

    for path in _walk(search_dir, skip):
        if path.suffix != extension or path == main_file or path.name in excluded:
            continue

        contents = path.read_text(encoding="utf-8", errors="replace")
        filename = Path(os.path.relpath(path, relative_to)).as_posix()
        files.append(FileEntry(filename=filename, contents=contents))

    _LOGGER.debug("Collected %d project file(s) under %s", len(files), search_dir)
    return files


__all__ = [
    "collect_project_files",
    "language_for_path",
]
