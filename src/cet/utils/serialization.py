"""Serialization helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def to_json(payload: Any, *, indent: int = 2) -> str:
    """Serialise API models (or containers of them) using their wire names."""
    if isinstance(payload, BaseModel):
        return payload.model_dump_json(by_alias=True, indent=indent)

    def _default(obj: Any) -> Any:
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json", by_alias=True)
        if isinstance(obj, Path):
            return obj.as_posix()
        return str(obj)

    return json.dumps(payload, indent=indent, default=_default)
