"""Typer-based CLI for cet."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.json import JSON
from rich.table import Table
from rich.text import Text

from . import __version__
from .api.client import CompilerExplorerError
from .api.models import CompileResponse, Filters
from .session import CompileError, compile_file
from .state import AppState, build_state
from .utils import compile_status, to_json
from .watch import WatchError, watch

EXAMPLES = """\
Examples:

  cet compile --args='-O ReleaseFast -target aarch64-macos -mcpu=apple_m4' main.zig

  cet compile --compiler=g132 --args='-O3' main.c

  cet compile --once --source main.zig

  cet compile --root=. src/main.zig   # multi-file project with imports from repo root

  cet compilers zig
"""

app = typer.Typer(
    add_completion=False,
    help="cet - Compiler Explorer Terminal",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"cet {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Compile local sources on a Compiler Explorer server and watch the assembly."""


def _fail(message: str) -> NoReturn:
    err_console.print(f"Error: {message}", style="red", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)


def _verbosity(verbose: bool, quiet: bool) -> Optional[str]:
    if verbose:
        return "verbose"
    if quiet:
        return "quiet"
    return None


@app.command("compile", epilog=EXAMPLES)
def compile_command(
    file: Path = typer.Argument(..., help="Main source file"),
    server: Optional[str] = typer.Option(None, "--server", help="Compiler Explorer server URL"),
    compiler: Optional[str] = typer.Option(
        None, "--compiler", help="Compiler ID (e.g. ztrunk, z0140, g141, clang1910)"
    ),
    args: Optional[str] = typer.Option(
        None, "--args", help="Compiler arguments (e.g. '-O ReleaseFast -target aarch64-macos')"
    ),
    once: bool = typer.Option(False, "--once", help="Compile once and exit (don't watch)"),
    show_source: bool = typer.Option(False, "--source", help="Show highlighted source code"),
    root: Optional[Path] = typer.Option(
        None, "--root", help="Project root for multi-file imports (default: file's directory)"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
    json_output: bool = typer.Option(False, "--json", help="Emit the raw response as JSON (requires --once)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and watch events"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings"),
) -> None:
    """Compile FILE remotely, then recompile on every save."""

    if json_output and not once:
        raise typer.BadParameter("--json requires --once", param_hint="--json")

    if not file.exists():
        _fail(f"file {file} does not exist")

    state: AppState = build_state(
        config_path,
        server=server,
        verbosity=_verbosity(verbose, quiet),
        console=console,
    )
    settings = state.config
    compiler_id = compiler or settings.compile.compiler
    user_args = settings.compile.args if args is None else args
    filters = Filters.from_settings(settings.compile.filters)

    def run_compile(render: bool = True) -> CompileResponse:
        return compile_file(
            state.client,
            state.renderer,
            file,
            compiler=compiler_id,
            args=user_args,
            show_source=show_source or settings.output.show_source,
            project_root=root,
            filters=filters,
            skip_dirs=settings.project.skip_dirs,
            excluded_names=settings.project.excluded_names,
            render=render,
        )

    if once:
        try:
            with compile_status(console, f"Compiling {file.name} with {compiler_id}…"):
                result = run_compile(render=not json_output)
        except (CompileError, CompilerExplorerError) as exc:
            _fail(str(exc))
        finally:
            state.client.close()
        if json_output:
            console.print(JSON(to_json(result)), soft_wrap=True)
        return

    try:
        watch(
            run_compile,
            state.renderer,
            file,
            compiler=compiler_id,
            args=user_args,
            server=settings.server.url,
            debounce=settings.watch.debounce_seconds,
        )
    except WatchError as exc:
        _fail(str(exc))
    finally:
        state.client.close()


@app.command("compilers")
def compilers_command(
    language: Optional[str] = typer.Argument(None, help="Only list compilers for this language (e.g. zig, c++)"),
    server: Optional[str] = typer.Option(None, "--server", help="Compiler Explorer server URL"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
) -> None:
    """List compiler IDs available on the server."""

    state = build_state(config_path, server=server, console=console)
    try:
        compilers = state.client.list_compilers(language)
    except CompilerExplorerError as exc:
        _fail(str(exc))
    finally:
        state.client.close()

    if json_output:
        console.print(JSON(to_json(compilers)), soft_wrap=True)
        return

    title = f"Compilers ({language})" if language else "Compilers"
    table = Table(title=title)
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Language")
    for info in compilers:
        table.add_row(Text(info.id), Text(info.name), Text(info.lang))
    console.print(table)


def run() -> None:
    app()
