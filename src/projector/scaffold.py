"""Populate a project root from its resolved scaffold."""

from __future__ import annotations

import shutil
from typing import Any, assert_never

from . import log
from .config import InitScaffold, ResolvedConfig, TemplateScaffold
from .errors import FileSystemError
from .manifest import write_manifest

INIT_MANIFEST: dict[str, Any] = {
    "name": "project",
    "packageManager": "pnpm@10.10.0",
}


def apply_scaffold(config: ResolvedConfig) -> None:
    """Scaffold ``config.directory``.

    ``InitScaffold`` writes a minimal manifest and nothing else.
    ``TemplateScaffold`` copies every entry of the template into the root,
    merging into whatever already exists there.

    Raises:
        FileSystemError: If writing or copying fails.
    """
    scaffold = config.scaffold
    root = config.directory
    match scaffold:
        case InitScaffold():
            log.debug(f"Scaffolding init manifest in {root}")
            write_manifest(root, dict(INIT_MANIFEST))
        case TemplateScaffold(dir=source):
            log.debug(f"Copying template {source} -> {root}")
            try:
                shutil.copytree(source, root, symlinks=True, dirs_exist_ok=True)
            except OSError as exc:
                raise FileSystemError("copy", exc) from exc
        case _:
            assert_never(scaffold)
