"""Pydantic models for the Compiler Explorer REST API.

Attribute names are snake_case; the JSON wire names (camelCase) are kept as
aliases so requests serialise and responses parse without manual mapping.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config import FilterSettings


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FileEntry(_WireModel):
    """Extra source file sent alongside the main source."""

    filename: str
    contents: str


class Filters(_WireModel):
    """Assembly output filters understood by the compile endpoint."""

    binary: bool = False
    comment_only: bool = Field(default=True, alias="commentOnly")
    demangle: bool = True
    directives: bool = True
    intel: bool = True
    labels: bool = True
    trim: bool = False

    @classmethod
    def from_settings(cls, settings: FilterSettings) -> Filters:
        return cls.model_validate(settings.model_dump())


class CompileOptions(_WireModel):
    user_arguments: str = Field(default="", alias="userArguments")
    filters: Filters = Field(default_factory=Filters)


class CompileRequest(_WireModel):
    source: str
    options: CompileOptions = Field(default_factory=CompileOptions)
    files: list[FileEntry] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body; ``files`` is dropped when there are none."""
        payload = self.model_dump(by_alias=True, exclude={"files"})
        if self.files:
            payload["files"] = [entry.model_dump(by_alias=True) for entry in self.files]
        return payload


class OutputLine(_WireModel):
    text: str = ""


class AsmSource(_WireModel):
    file: str | None = None
    line: int | None = None


class AsmLine(_WireModel):
    text: str = ""
    source: AsmSource | None = None


class CompileResponse(_WireModel):
    code: int = 0
    stdout: list[OutputLine] = Field(default_factory=list)
    stderr: list[OutputLine] = Field(default_factory=list)
    asm: list[AsmLine] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.code == 0

    def assembly_text(self) -> str:
        return "".join(f"{line.text}\n" for line in self.asm)


class CompilerInfo(_WireModel):
    """One entry of ``GET /api/compilers``."""

    id: str
    name: str = ""
    lang: str = ""
    compiler_type: str | None = Field(default=None, alias="compilerType")
    semver: str | None = None
    instruction_set: str | None = Field(default=None, alias="instructionSet")


__all__ = [
    "AsmLine",
    "AsmSource",
    "CompileOptions",
    "CompileRequest",
    "CompileResponse",
    "CompilerInfo",
    "FileEntry",
    "Filters",
    "OutputLine",
]
