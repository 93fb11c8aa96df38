"""Programmatic scaffolding and control of throwaway project directories.

Example:
    >>> from projector import __version__
    >>> isinstance(__version__, str)
    True
"""

from __future__ import annotations

from .config import ConfigInput, LinkInput, PackageInput
from .errors import (
    FileSystemError,
    InvalidDirectoryError,
    PackageJsonMissingError,
    ProjectorError,
)
from .project import Project
from .services import create

__all__ = [
    "ConfigInput",
    "FileSystemError",
    "InvalidDirectoryError",
    "LinkInput",
    "PackageInput",
    "PackageJsonMissingError",
    "Project",
    "ProjectorError",
    "__version__",
    "create",
]

try:
    from importlib.metadata import PackageNotFoundError, version
except Exception:  # pragma: no cover - import edge cases
    __version__ = "0.0.0"
else:
    try:
        __version__ = version("projector")
    except PackageNotFoundError:
        __version__ = "0.0.0"
