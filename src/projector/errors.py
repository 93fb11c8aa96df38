"""Failure contracts for project creation.

Every expected failure raised while creating or operating a project is a
``ProjectorError`` subclass carrying a stable ``code``. Programmer bugs raise
normal exceptions.
"""

from __future__ import annotations

from typing import Literal

ProjectorErrorCode = Literal[
    "invalid_directory",
    "package_json_missing",
    "io_failed",
]


class ProjectorError(Exception):
    """Expected failure while creating or operating a project.

    Use ``raise FileSystemError(...) from exc`` to chain a causing exception;
    it is available as ``__cause__``.
    """

    def __init__(self, code: ProjectorErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code


class InvalidDirectoryError(ProjectorError):
    """A path could not be interpreted as an absolute directory."""

    def __init__(self, path: str, *, reason: str | None = None) -> None:
        message = f"Invalid directory path: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__("invalid_directory", message)
        self.path = path


class PackageJsonMissingError(ProjectorError):
    """Package management is enabled but the project has no manifest."""

    def __init__(self, directory: str) -> None:
        super().__init__("package_json_missing", f"package.json missing in {directory}")
        self.directory = directory


class FileSystemError(ProjectorError):
    """A file-system or subprocess operation failed."""

    def __init__(self, operation: str, cause: object) -> None:
        super().__init__("io_failed", f"FileSystem {operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
