"""cet - Compiler Explorer in the terminal."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:  # pragma: no cover - metadata probe
    __version__ = version("cet")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"
