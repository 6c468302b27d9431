"""Terminal rendering of sources, diagnostics and assembly."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from .api.models import CompileResponse

ASM_LEXER = "gas"
FALLBACK_LEXER = "text"
DEFAULT_THEME = "gruvbox-dark"


class Renderer:
    """Writes compile output to a Rich console."""

    def __init__(self, console: Console | None = None, theme: str = DEFAULT_THEME) -> None:
        self.console = console or Console()
        self.theme = theme

    def highlight(self, code: str, language: str) -> Syntax:
        """Return a highlighted renderable; unknown languages render as plain text."""
        return Syntax(
            code,
            language or FALLBACK_LEXER,
            theme=self.theme,
            background_color="default",
            word_wrap=False,
        )

    def header(self, title: str) -> None:
        self.console.print(f"━━━ {title} ━━━", style="cyan", markup=False, highlight=False)

    def source(self, code: str, language: str) -> None:
        self.header("Source")
        self.console.print(self.highlight(code, language))

    def response(self, result: CompileResponse) -> None:
        for line in result.stderr:
            self.console.print(Text(line.text, style="red"))

        for line in result.stdout:
            self.console.print(Text(line.text))

        if result.asm:
            self.console.print()
            self.header("Assembly")
            self.console.print(self.highlight(result.assembly_text(), ASM_LEXER))

    def warning(self, message: str) -> None:
        self.console.print(Text(f"Warning: {message}", style="yellow"))

    def error(self, message: str) -> None:
        self.console.print(Text(f"Error: {message}", style="red"))

    def watch_banner(self, file_path: str, compiler: str, args: str, server: str) -> None:
        lines = [
            f"⚡ Watching {file_path}",
            f"   Compiler: {compiler}",
            f"   Args: {args}",
            f"   Server: {server}",
        ]
        for line in lines:
            self.console.print(Text(line, style="blue"))
        self.console.print()

    def rerun_banner(self, file_path: str, now: datetime | None = None) -> None:
        stamp = (now or datetime.now()).strftime("%H:%M:%S")
        self.console.print(Text(f"⚡ {file_path} — {stamp}", style="blue"))
        self.console.print()

    def clear(self) -> None:
        self.console.clear()


__all__ = ["Renderer"]
