"""Path helpers for decoding project directories and naming temp roots."""

from __future__ import annotations

import time
from pathlib import Path

from .errors import FileSystemError, InvalidDirectoryError

MANIFEST_FILENAME = "package.json"


def decode_abs_dir(value: str | Path) -> Path:
    """Interpret a string or path as an absolute directory.

    Strings must be non-empty, absolute, and free of NUL bytes. ``Path``
    values are taken as already decoded.

    Args:
        value: Raw directory input.

    Returns:
        Absolute directory path.

    Raises:
        InvalidDirectoryError: If a string cannot be decoded.

    Example:
        >>> decode_abs_dir("/tmp/project/")
        PosixPath('/tmp/project')
    """
    if isinstance(value, Path):
        return value
    if not isinstance(value, str) or not value:
        raise InvalidDirectoryError(str(value))
    if "\x00" in value:
        raise InvalidDirectoryError(value, reason="contains NUL byte")
    if not value.startswith("/"):
        raise InvalidDirectoryError(value, reason="not absolute")
    return Path(value)


def encode_dir(path: Path) -> str:
    """Render a directory path with a single trailing separator.

    Example:
        >>> encode_dir(Path("/tmp/project"))
        '/tmp/project/'
        >>> encode_dir(Path("/"))
        '/'
    """
    text = str(path)
    return text if text.endswith("/") else f"{text}/"


def manifest_path(root: Path) -> Path:
    """Return the manifest path for a project root.

    Example:
        >>> manifest_path(Path("/tmp/project")).name
        'package.json'
    """
    return root / MANIFEST_FILENAME


def last_segment(path: Path) -> str | None:
    """Return the final segment of a directory path, if any.

    Example:
        >>> last_segment(Path("/tmp/mylib/"))
        'mylib'
        >>> last_segment(Path("/")) is None
        True
    """
    return path.name or None


def make_temp_project_dir(temp_root: Path, prefix: str) -> Path:
    """Create a fresh, uniquely named project directory under ``temp_root``.

    The name is ``<prefix><millisecond-timestamp>``. When another call already
    claimed that name, a ``-<n>`` counter suffix is appended until an exclusive
    create succeeds.

    Raises:
        FileSystemError: If the directory cannot be created.
    """
    stamp = time.time_ns() // 1_000_000
    base = f"{prefix}{stamp}"
    try:
        temp_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError("makeDirectory", exc) from exc
    attempt = 0
    while True:
        name = base if attempt == 0 else f"{base}-{attempt}"
        candidate = temp_root / name
        try:
            candidate.mkdir()
        except FileExistsError:
            attempt += 1
            continue
        except OSError as exc:
            raise FileSystemError("makeDirectory", exc) from exc
        return candidate
