"""Shared application state for the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console

from .api.client import CompilerExplorerClient
from .config import AppConfig, load_config
from .logging import configure_logging
from .render import Renderer


@dataclass(slots=True)
class AppState:
    config: AppConfig
    client: CompilerExplorerClient
    renderer: Renderer


def build_state(
    config_path: Optional[Path],
    *,
    server: Optional[str] = None,
    verbosity: Optional[str] = None,
    console: Console | None = None,
) -> AppState:
    """Construct an application state bundle.

    ``server`` and ``verbosity`` are command-line overrides; when omitted
    the configured values are used.
    """

    config = load_config(config_path)
    if server:
        config.server.url = server
    if verbosity:
        config.output.verbosity = verbosity
    configure_logging(config.verbosity)  # type: ignore[arg-type]

    client = CompilerExplorerClient(config.server.url, timeout=config.server.timeout)
    renderer = Renderer(console, theme=config.output.theme)
    return AppState(config=config, client=client, renderer=renderer)
