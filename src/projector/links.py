"""Local package links: relative specifiers and workspace-aware planning.

Each link either rewrites an existing ``workspace:*`` dependency in the
manifest or becomes a package-manager ``add`` command. Planning is pure;
rewrites must be committed before any add is issued.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, assert_never

from . import log
from .config import LinkInput, LinkProtocol
from .errors import InvalidDirectoryError
from .manifest import declares_workspace_dependency
from .paths import decode_abs_dir, encode_dir, last_segment

UNKNOWN_PACKAGE_NAME = "unknown"


@dataclass(frozen=True)
class LinkRequest:
    """A decoded link request.

    Attributes:
        target: Absolute directory of the package to link.
        protocol: Dependency protocol.
    """

    target: Path
    protocol: LinkProtocol


@dataclass
class LinkPlan:
    """Decisions for a batch of link requests.

    Attributes:
        rewrites: Dependency name to specifier, for ``workspace:*`` entries.
        adds: Specifiers to pass to ``<package manager> add``, in request order.
    """

    rewrites: dict[str, str] = field(default_factory=dict)
    adds: list[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.rewrites and not self.adds


def decode_link(link: LinkInput) -> LinkRequest:
    """Decode a caller-supplied link into a ``LinkRequest``.

    Raises:
        InvalidDirectoryError: If the link directory cannot be decoded.
    """
    return LinkRequest(target=decode_abs_dir(link.dir), protocol=link.protocol)


def relative_link_path(root: Path, target: Path) -> str:
    """Return the path from ``root`` to ``target`` as a sibling reference.

    The target is expressed relative to the root's parent and prefixed with
    ``../``.

    Raises:
        InvalidDirectoryError: If ``target`` is not under the root's parent.

    Example:
        >>> relative_link_path(Path("/tmp/p"), Path("/tmp/mylib"))
        '../mylib'
        >>> relative_link_path(Path("/work/app"), Path("/work/libs/core"))
        '../libs/core'
    """
    parent = root.parent
    if not target.is_relative_to(parent):
        raise InvalidDirectoryError(
            encode_dir(target),
            reason=f"link target is not reachable from {encode_dir(parent)}",
        )
    relative = target.relative_to(parent).as_posix()
    if relative == ".":
        return ".."
    return f"../{relative}"


def link_package_name(target: Path) -> str:
    """Return the package name implied by a link target directory.

    Example:
        >>> link_package_name(Path("/tmp/mylib"))
        'mylib'
        >>> link_package_name(Path("/"))
        'unknown'
    """
    return last_segment(target) or UNKNOWN_PACKAGE_NAME


def dependency_specifier(protocol: LinkProtocol, relative_path: str) -> str:
    """Return the dependency specifier for a link.

    Example:
        >>> dependency_specifier("file", "../mylib")
        'file:../mylib'
    """
    match protocol:
        case "link":
            return f"link:{relative_path}"
        case "file":
            return f"file:{relative_path}"
        case _:
            assert_never(protocol)


def plan_links(
    root: Path,
    links: Iterable[LinkInput | LinkRequest],
    manifest: Mapping[str, Any] | None,
) -> LinkPlan:
    """Decide, per link, between a manifest rewrite and an ``add`` command.

    Args:
        root: Project root.
        links: Link requests in caller order.
        manifest: Manifest loaded after scaffolding, if any.

    Returns:
        The ``LinkPlan`` for the batch.

    Raises:
        InvalidDirectoryError: If a link target cannot be decoded or is not
            reachable from the project.
    """
    plan = LinkPlan()
    for link in links:
        request = link if isinstance(link, LinkRequest) else decode_link(link)
        relative_path = relative_link_path(root, request.target)
        name = link_package_name(request.target)
        specifier = dependency_specifier(request.protocol, relative_path)
        if declares_workspace_dependency(manifest, name):
            log.trace(f"Link {name}: queue workspace rewrite to {specifier}")
            plan.rewrites[name] = specifier
        else:
            log.trace(f"Link {name}: add {specifier}")
            plan.adds.append(specifier)
    return plan


def add_command(specifier: str) -> str:
    """Return the package-manager arguments that add ``specifier``.

    Example:
        >>> add_command("link:../mylib")
        'add link:../mylib'
    """
    return f"add {specifier}"


def apply_link_adds(plan: LinkPlan, package_manager: Callable[[str], str]) -> None:
    """Issue one ``add`` command per planned specifier, in order."""
    for specifier in plan.adds:
        package_manager(add_command(specifier))
