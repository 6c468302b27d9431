"""Progress rendering utilities."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.status import Status


@contextmanager
def compile_status(console: Console, description: str) -> Iterator[Status]:
    """Show a spinner while a request is in flight; it vanishes on exit."""
    with console.status(description, spinner="dots") as status:
        yield status
