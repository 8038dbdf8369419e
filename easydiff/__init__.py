"""Inline git diff viewer with hunk-level staging."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("easydiff")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
