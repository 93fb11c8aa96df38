"""Configuration input contracts and resolution for project creation.

Callers describe a project with a loosely shaped ``ConfigInput``; it is
normalized once into an immutable ``ResolvedConfig`` before anything touches
the project directory.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from . import log
from .errors import InvalidDirectoryError
from .paths import decode_abs_dir, make_temp_project_dir
from .settings import ProjectorSettings

LinkProtocol = Literal["link", "file"]
ScriptRunner = Callable[..., Any]
ScriptFactory = Callable[[Any], Mapping[str, ScriptRunner]]


@dataclass(frozen=True)
class InitScaffold:
    """Scaffold a blank project with a minimal manifest."""


@dataclass(frozen=True)
class TemplateScaffold:
    """Scaffold a project by copying a template directory.

    Attributes:
        dir: Absolute template source directory.
    """

    dir: Path


Scaffold = InitScaffold | TemplateScaffold


@dataclass(frozen=True)
class PackageSettings:
    """Resolved package-management switches.

    Attributes:
        enabled: Whether package management applies to the project.
        install: Whether to run an install once links are applied.
    """

    enabled: bool
    install: bool


@dataclass(frozen=True)
class ResolvedConfig:
    """Canonical configuration for one project-creation call."""

    directory: Path
    scaffold: Scaffold
    package: PackageSettings


class LinkInput(BaseModel):
    """A local package to link into the project.

    Attributes:
        dir: Absolute directory of the package, as string or path.
        protocol: Dependency protocol (``link`` or ``file``).
    """

    model_config = ConfigDict(frozen=True)

    dir: str | Path
    protocol: LinkProtocol


class PackageInput(BaseModel):
    """Package-management options.

    Attributes:
        install: Run ``install`` after links are applied.
        links: Local packages to link.
    """

    install: bool | None = None
    links: list[LinkInput] | None = None


class ConfigInput(BaseModel):
    """Caller-facing configuration for ``projector.create``.

    Attributes:
        directory: Project root. A fresh temporary directory is created when
            omitted.
        package: Package-management options, or ``False`` to disable.
        scripts: Factory receiving the project handle and returning named
            script runners.
        scaffold: ``None`` for init, a template directory (string or path),
            ``{"type": "template", "dir": ...}``, or ``{"type": "init"}``.

    Example:
        >>> ConfigInput(package=False).package
        False
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    directory: str | Path | None = None
    package: Literal[False] | PackageInput | None = None
    scripts: ScriptFactory | None = None
    scaffold: Any = None

    @property
    def links(self) -> list[LinkInput]:
        if not isinstance(self.package, PackageInput):
            return []
        return list(self.package.links or [])


def resolve_scaffold(value: object) -> Scaffold:
    """Normalize scaffold input into a resolved scaffold.

    A plain string always names a template directory, never ``"init"``.

    Raises:
        InvalidDirectoryError: If a template directory string cannot be decoded.

    Example:
        >>> resolve_scaffold(None)
        InitScaffold()
        >>> resolve_scaffold("/srv/template")
        TemplateScaffold(dir=PosixPath('/srv/template'))
    """
    if not value:
        return InitScaffold()
    if isinstance(value, str):
        return TemplateScaffold(dir=decode_abs_dir(value))
    if isinstance(value, Path):
        return TemplateScaffold(dir=value)
    if isinstance(value, TemplateScaffold):
        return value
    if isinstance(value, Mapping) and value.get("type") == "template":
        dir_input = value.get("dir")
        if not isinstance(dir_input, (str, Path)):
            raise InvalidDirectoryError(str(dir_input))
        return TemplateScaffold(dir=decode_abs_dir(dir_input))
    return InitScaffold()


def resolve_directory(value: str | Path | None, settings: ProjectorSettings) -> Path:
    """Decode the project root, or create a fresh temporary one.

    Raises:
        InvalidDirectoryError: If a directory string cannot be decoded.
        FileSystemError: If the temporary directory cannot be created.
    """
    if value:
        return decode_abs_dir(value)
    directory = make_temp_project_dir(settings.temp_root, settings.temp_prefix)
    log.debug(f"Created temporary project directory {directory}")
    return directory


def resolve_package(value: Literal[False] | PackageInput | None) -> PackageSettings:
    """Resolve package-management switches.

    Example:
        >>> resolve_package(False)
        PackageSettings(enabled=False, install=False)
        >>> resolve_package(None)
        PackageSettings(enabled=True, install=False)
    """
    enabled = value is not False
    install = bool(value.install) if isinstance(value, PackageInput) else False
    return PackageSettings(enabled=enabled, install=enabled and install)


def resolve_config(config_input: ConfigInput, *, settings: ProjectorSettings) -> ResolvedConfig:
    """Normalize caller input into a ``ResolvedConfig``.

    The scaffold is decoded before any temporary directory is created, so a
    bad template path leaves nothing behind.
    """
    scaffold = resolve_scaffold(config_input.scaffold)
    directory = resolve_directory(config_input.directory, settings)
    return ResolvedConfig(
        directory=directory,
        scaffold=scaffold,
        package=resolve_package(config_input.package),
    )
