"""Parse git raw diff output into a compact per-commit revision cache."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("revcache")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
