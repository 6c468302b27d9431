"""Shared pytest fixtures for cet tests."""

from __future__ import annotations

import copy
import io
import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from rich.console import Console

from cet.api.client import CompilerExplorerClient
from cet.render import Renderer


# ============================================================================
# Sample Payloads
# ============================================================================

SAMPLE_RESPONSE: dict[str, Any] = {
    "code": 0,
    "okToCache": True,
    "stdout": [],
    "stderr": [{"text": "main.zig:3:5: warning: unused local"}],
    "asm": [
        {"text": "main:", "source": None},
        {"text": "        push    rbp", "source": {"file": None, "line": 1}},
        {"text": "        ret", "source": {"file": None, "line": 2}},
    ],
    "execResult": {"code": 0},
}

SAMPLE_COMPILERS: list[dict[str, Any]] = [
    {"id": "ztrunk", "name": "zig trunk", "lang": "zig", "compilerType": "", "semver": "trunk"},
    {"id": "z0140", "name": "zig 0.14.0", "lang": "zig", "compilerType": "", "semver": "0.14.0"},
]


# ============================================================================
# Console / Renderer Fixtures
# ============================================================================

@pytest.fixture
def output_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def plain_console(output_buffer: io.StringIO) -> Console:
    """A colourless console writing to a buffer."""
    return Console(file=output_buffer, force_terminal=False, color_system=None, width=120)


@pytest.fixture
def renderer(plain_console: Console) -> Renderer:
    return Renderer(plain_console)


# ============================================================================
# HTTP Fixtures
# ============================================================================

def make_http_response(payload: Any = None, *, status: int = 200, text: str | None = None) -> requests.Response:
    """Build a real ``requests.Response`` carrying ``payload`` as JSON (or raw ``text``)."""
    response = requests.Response()
    response.status_code = status
    body = text if text is not None else json.dumps(payload)
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    return response


@pytest.fixture
def make_response():
    """Factory fixture for canned HTTP responses."""
    return make_http_response


@pytest.fixture
def sample_response() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_RESPONSE)


@pytest.fixture
def sample_compilers() -> list[dict[str, Any]]:
    return copy.deepcopy(SAMPLE_COMPILERS)


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_http_response(SAMPLE_RESPONSE)
    session.get.return_value = make_http_response(SAMPLE_COMPILERS)
    return session


@pytest.fixture
def client(mock_session: MagicMock) -> CompilerExplorerClient:
    return CompilerExplorerClient("https://ce.example.test/", timeout=5, session=mock_session)


# ============================================================================
# Project Fixtures
# ============================================================================

@pytest.fixture
def zig_project(tmp_path: Path) -> Path:
    """Create a small Zig project tree and return the main file."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "main.zig").write_text('const util = @import("util.zig");\npub fn main() void {}\n')
    (src / "util.zig").write_text("pub fn add(a: i32, b: i32) i32 { return a + b; }\n")
    (src / "notes.txt").write_text("not source\n")
    (src / "nested").mkdir()
    (src / "nested" / "deep.zig").write_text("pub const x = 1;\n")
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "shared.zig").write_text("pub const y = 2;\n")
    (tmp_path / "build.zig").write_text("// build script\n")
    (tmp_path / ".zig-cache").mkdir()
    (tmp_path / ".zig-cache" / "cached.zig").write_text("// cache\n")
    (tmp_path / "zig-out").mkdir()
    (tmp_path / "zig-out" / "out.zig").write_text("// out\n")
    return src / "main.zig"
