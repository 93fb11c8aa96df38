"""Manifest (``package.json``) loading and workspace-specifier rewriting."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from . import log
from .errors import FileSystemError
from .paths import manifest_path

WORKSPACE_SPECIFIER = "workspace:*"

ManifestDocument = dict[str, Any]


def render_manifest(document: Mapping[str, Any]) -> str:
    """Render a manifest as 2-space indented JSON with a trailing newline.

    Example:
        >>> render_manifest({"name": "project"})
        '{\\n  "name": "project"\\n}\\n'
    """
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_manifest(root: Path, document: Mapping[str, Any]) -> Path:
    """Write ``document`` as the project manifest under ``root``."""
    path = manifest_path(root)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_manifest(document), encoding="utf-8")
    except OSError as exc:
        raise FileSystemError("write", exc) from exc
    return path


def load_manifest(root: Path) -> ManifestDocument | None:
    """Load the project manifest if one exists and parses.

    Unparseable content, or JSON that is not an object, is treated the same
    as a missing file.

    Args:
        root: Project root.

    Returns:
        Parsed manifest, or ``None``.

    Raises:
        FileSystemError: If the file exists but cannot be read.
    """
    path = manifest_path(root)
    if not path.exists():
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileSystemError("readString", exc) from exc
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        log.debug(f"Ignoring unparseable manifest {path}: {exc}")
        return None
    if not isinstance(payload, dict):
        log.debug(f"Ignoring manifest {path}: expected a JSON object")
        return None
    return payload


def declares_workspace_dependency(manifest: Mapping[str, Any] | None, name: str) -> bool:
    """Return whether ``manifest`` declares ``name`` as ``workspace:*``.

    Example:
        >>> declares_workspace_dependency({"dependencies": {"a": "workspace:*"}}, "a")
        True
        >>> declares_workspace_dependency({"dependencies": {"a": "^1.0.0"}}, "a")
        False
    """
    if not manifest:
        return False
    dependencies = manifest.get("dependencies")
    if not isinstance(dependencies, Mapping):
        return False
    return dependencies.get(name) == WORKSPACE_SPECIFIER


def apply_workspace_rewrites(
    root: Path, rewrites: Mapping[str, str]
) -> ManifestDocument | None:
    """Replace dependency specifiers in the on-disk manifest in one write.

    The manifest is read fresh from disk. Only the targeted ``dependencies``
    entries change; every other field keeps its value and position.

    Args:
        root: Project root.
        rewrites: Mapping of dependency name to its new specifier.

    Returns:
        The rewritten manifest, or ``None`` when there was nothing to do.

    Raises:
        FileSystemError: If the manifest cannot be read, parsed, or written.
    """
    if not rewrites:
        return None
    path = manifest_path(root)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileSystemError("readString", exc) from exc
    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as exc:
        raise FileSystemError("parse manifest", exc) from exc
    if not isinstance(manifest, dict):
        raise FileSystemError("parse manifest", f"{path} is not a JSON object")
    dependencies = manifest.setdefault("dependencies", {})
    if not isinstance(dependencies, dict):
        raise FileSystemError("parse manifest", f"{path} dependencies is not an object")
    for name, specifier in rewrites.items():
        log.debug(f"Rewriting dependency {name}: {WORKSPACE_SPECIFIER} -> {specifier}")
        dependencies[name] = specifier
    write_manifest(root, manifest)
    return manifest
