"""Bulk and single-file writes scoped to a project root."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import FileSystemError, InvalidDirectoryError
from .paths import encode_dir

FileContent = str | bytes | Mapping[str, Any] | list[Any]
LayoutTree = Mapping[str, Any]

JSON_SUFFIX = ".json"


def _join(prefix: str, key: str) -> str:
    key = key.strip("/")
    if not key:
        raise ValueError("layout keys must name a file or directory")
    return f"{prefix}/{key}" if prefix else key


def flatten(tree: LayoutTree, prefix: str = "") -> dict[str, FileContent]:
    """Flatten a nested layout tree into ``{relative_path: content}``.

    A mapping under a key ending in ``.json`` is JSON file content; any other
    mapping is a directory. Keys may contain ``/``.

    Example:
        >>> flatten({"src": {"index.js": "x"}, "a.json": {"k": 1}})
        {'src/index.js': 'x', 'a.json': {'k': 1}}
    """
    flat: dict[str, FileContent] = {}
    for key, value in tree.items():
        path = _join(prefix, key)
        if isinstance(value, Mapping) and not key.endswith(JSON_SUFFIX):
            flat.update(flatten(value, path))
        elif isinstance(value, (str, bytes, Mapping, list)):
            flat[path] = value
        else:
            raise TypeError(f"unsupported layout content for {path}: {type(value).__name__}")
    return flat


def _render(content: FileContent) -> str | bytes:
    if isinstance(content, (str, bytes)):
        return content
    return json.dumps(content, indent=2, ensure_ascii=False) + "\n"


class Layout:
    """File operations rooted at a project directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def resolve(self, path: str | Path) -> Path:
        """Return the absolute location of ``path`` inside the root.

        Raises:
            InvalidDirectoryError: If ``path`` points outside the root.
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.root / candidate
        normalized = Path(os.path.normpath(candidate))
        if normalized != self.root and not normalized.is_relative_to(self.root):
            raise InvalidDirectoryError(
                str(path), reason=f"outside project root {encode_dir(self.root)}"
            )
        return normalized

    def write(self, path: str | Path, content: FileContent) -> Path:
        """Write one file, creating parent directories as needed."""
        target = self.resolve(path)
        rendered = _render(content)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(rendered, bytes):
                target.write_bytes(rendered)
            else:
                target.write_text(rendered, encoding="utf-8")
        except OSError as exc:
            raise FileSystemError("write", exc) from exc
        return target

    def set(self, tree: LayoutTree) -> dict[str, FileContent]:
        """Write every file described by ``tree`` and return the flat layout."""
        flat = flatten(tree)
        for path, content in flat.items():
            self.write(path, content)
        return flat

    def read(self, path: str | Path) -> str:
        """Return the text content of a file inside the root."""
        target = self.resolve(path)
        try:
            return target.read_text(encoding="utf-8")
        except OSError as exc:
            raise FileSystemError("readString", exc) from exc

    def exists(self, path: str | Path) -> bool:
        return self.resolve(path).exists()
