"""A single compile cycle: read, collect, send, render."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from .api.client import CompilerExplorerClient
from .api.models import CompileOptions, CompileRequest, CompileResponse, FileEntry, Filters
from .config import DEFAULT_EXCLUDED_NAMES, DEFAULT_SKIP_DIRS
from .project import collect_project_files, language_for_path
from .render import Renderer

_LOGGER = logging.getLogger(__name__)


class CompileError(Exception):
    """Raised when a compile cannot be prepared (e.g. unreadable source)."""
    pass


def build_request(
    source: str,
    args: str,
    files: list[FileEntry] | None = None,
    filters: Filters | None = None,
) -> CompileRequest:
    return CompileRequest(
        source=source,
        files=files or None,
        options=CompileOptions(user_arguments=args, filters=filters or Filters()),
    )


def compile_file(
    client: CompilerExplorerClient,
    renderer: Renderer,
    file_path: Path | str,
    *,
    compiler: str,
    args: str = "",
    show_source: bool = False,
    project_root: Path | str | None = None,
    filters: Filters | None = None,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    excluded_names: Iterable[str] = DEFAULT_EXCLUDED_NAMES,
    render: bool = True,
) -> CompileResponse:
    """Compile ``file_path`` remotely and render the result.

    Sibling files with the same extension are sent along so that relative
    imports resolve on the server. If they cannot be collected a warning is
    printed and only the main file is sent.

    Raises:
        CompileError: The main source could not be read.
        CompilerExplorerError: The request failed or the reply was not understood.
    """
    path = Path(file_path)
    try:
        source = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise CompileError(f"failed to read file: {exc}") from exc

    if show_source and render:
        renderer.source(source, language_for_path(path))

    abs_path = Path(os.path.abspath(path))
    main_dir = abs_path.parent
    search_dir = Path(os.path.abspath(project_root)) if project_root else main_dir

    try:
        project_files = collect_project_files(
            search_dir,
            abs_path,
            main_dir,
            skip_dirs=skip_dirs,
            excluded_names=excluded_names,
        )
    except OSError as exc:
        _LOGGER.debug("Project scan of %s failed", search_dir, exc_info=True)
        renderer.warning(f"could not collect project files: {exc}")
        project_files = []

    request = build_request(source, args, project_files, filters)
    result = client.compile(compiler, request)
    _LOGGER.debug("Compiler %s exited with code %d", compiler, result.code)

    if render:
        renderer.response(result)
    return result


__all__ = ["CompileError", "build_request", "compile_file"]
