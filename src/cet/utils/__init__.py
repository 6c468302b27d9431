"""Utility helpers."""

from .progress import compile_status
from .serialization import to_json

__all__ = ["compile_status", "to_json"]
