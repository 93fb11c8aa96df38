"""Command line entry point for projector."""

from __future__ import annotations

import os
from typing import Literal, Optional

import typer

from . import log as projector_log
from .config import ConfigInput, LinkInput, PackageInput
from .errors import ProjectorError
from .services import create

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Scaffold and control throwaway project directories.",
)

LINK_PROTOCOLS = ("link", "file")


def _validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in projector_log.LEVEL_BY_NAME:
        choices = ", ".join(projector_log.LEVEL_BY_NAME)
        raise typer.BadParameter(f"expected one of: {choices}")
    return normalized


def parse_link(value: str) -> LinkInput:
    """Parse ``PATH[:link|file]`` into a link input (protocol defaults to link).

    Example:
        >>> parse_link("/tmp/mylib:file").protocol
        'file'
        >>> parse_link("/tmp/mylib").protocol
        'link'
    """
    path, sep, protocol = value.rpartition(":")
    if sep and protocol in LINK_PROTOCOLS:
        return LinkInput(dir=path, protocol=protocol)
    return LinkInput(dir=value, protocol="link")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log verbosity (trace, debug, info, success, warning, error).",
        callback=_validate_log_level,
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output."),
) -> None:
    if log_level:
        projector_log.set_level(log_level)
    if no_color:
        os.environ["PROJECTOR_NO_COLOR"] = "1"


@app.command("new")
def new_cmd(
    directory: Optional[str] = typer.Option(
        None, "--directory", "-d", help="Project root (default: fresh temp dir)."
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Template directory to copy."
    ),
    link: Optional[list[str]] = typer.Option(
        None, "--link", "-l", help="Local package to link, as PATH[:link|file]."
    ),
    install: bool = typer.Option(False, "--install", help="Run install after linking."),
    no_package: bool = typer.Option(
        False, "--no-package", help="Disable package management."
    ),
) -> None:
    """Create a project and print its root directory."""
    package: PackageInput | Literal[False]
    if no_package:
        if link or install:
            raise typer.BadParameter("--link/--install cannot be combined with --no-package")
        package = False
    else:
        package = PackageInput(install=install, links=[parse_link(item) for item in link or []])
    config = ConfigInput(directory=directory, scaffold=template, package=package)
    try:
        project = create(config)
    except ProjectorError as exc:
        projector_log.error(str(exc))
        raise typer.Exit(code=1) from exc
    projector_log.debug(f"Created project in {project.dir}")
    typer.echo(str(project.dir))
