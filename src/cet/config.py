"""Configuration loading and modelling."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default_config.toml"
USER_CONFIG_PATH = Path("~/.config/cet/config.toml").expanduser()

DEFAULT_SERVER = "https://godbolt.org"
DEFAULT_COMPILER = "ztrunk"
DEFAULT_SKIP_DIRS = frozenset({".zig-cache", ".git", ".idea", "node_modules", "target", "zig-out"})
DEFAULT_EXCLUDED_NAMES = frozenset({"build.zig"})


class ServerSettings(BaseModel):
    url: str = DEFAULT_SERVER
    timeout: float = 60.0


class FilterSettings(BaseModel):
    binary: bool = False
    comment_only: bool = True
    demangle: bool = True
    directives: bool = True
    intel: bool = True
    labels: bool = True
    trim: bool = False


class CompileSettings(BaseModel):
    compiler: str = DEFAULT_COMPILER
    args: str = ""
    filters: FilterSettings = Field(default_factory=FilterSettings)


class ProjectSettings(BaseModel):
    skip_dirs: list[str] = Field(default_factory=lambda: sorted(DEFAULT_SKIP_DIRS))
    excluded_names: list[str] = Field(default_factory=lambda: sorted(DEFAULT_EXCLUDED_NAMES))


class WatchSettings(BaseModel):
    debounce_ms: int = 100

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


class OutputSettings(BaseModel):
    verbosity: str = "normal"
    theme: str = "gruvbox-dark"
    show_source: bool = False


class AppConfig(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    compile: CompileSettings = Field(default_factory=CompileSettings)
    project: ProjectSettings = Field(default_factory=ProjectSettings)
    watch: WatchSettings = Field(default_factory=WatchSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def verbosity(self) -> str:
        return self.output.verbosity


def _load_toml(path: Path) -> dict[str, Any]:
    import tomllib

    with path.open("rb") as fh:
        return tomllib.load(fh)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from defaults, an optional user file and the environment.

    Search order: the ``default_config.toml`` shipped in this package, then ``config_path``
    (or ``~/.config/cet/config.toml`` when no path is given), then the
    ``CET_SERVER`` / ``CET_COMPILER`` environment variables. A ``.env`` file
    in the working directory is loaded first so it can supply those variables.
    """

    load_dotenv()

    data: dict[str, Any] = {}
    if DEFAULT_CONFIG_PATH.exists():
        data = _merge(data, _load_toml(DEFAULT_CONFIG_PATH))

    resolved_path = config_path
    if resolved_path is None and USER_CONFIG_PATH.exists():
        resolved_path = USER_CONFIG_PATH

    if resolved_path and resolved_path.exists():
        data = _merge(data, _load_toml(resolved_path))

    config = AppConfig(raw=data)

    if "server" in data:
        config.server = ServerSettings.model_validate(data["server"])
    if "compile" in data:
        config.compile = CompileSettings.model_validate(data["compile"])
    if "project" in data:
        config.project = ProjectSettings.model_validate(data["project"])
    if "watch" in data:
        config.watch = WatchSettings.model_validate(data["watch"])
    if "output" in data:
        config.output = OutputSettings.model_validate(data["output"])

    env_server = os.getenv("CET_SERVER")
    if env_server:
        config.server.url = env_server

    env_compiler = os.getenv("CET_COMPILER")
    if env_compiler:
        config.compile.compiler = env_compiler

    return config
