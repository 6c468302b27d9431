"""Compiler Explorer REST API client and wire models."""

from .client import CompilerExplorerClient, CompilerExplorerError
from .models import (
    AsmLine,
    AsmSource,
    CompileOptions,
    CompileRequest,
    CompileResponse,
    CompilerInfo,
    FileEntry,
    Filters,
    OutputLine,
)

__all__ = [
    "AsmLine",
    "AsmSource",
    "CompileOptions",
    "CompileRequest",
    "CompileResponse",
    "CompilerExplorerClient",
    "CompilerExplorerError",
    "CompilerInfo",
    "FileEntry",
    "Filters",
    "OutputLine",
]
