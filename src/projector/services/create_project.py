"""Create a project: resolve, scaffold, link, install, assemble the handle."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .. import log
from ..config import ConfigInput, resolve_config
from ..errors import PackageJsonMissingError
from ..exec import CommandRunner, ProcessRegistry, SubprocessCommandRunner
from ..links import apply_link_adds, plan_links
from ..manifest import apply_workspace_rewrites, load_manifest
from ..paths import encode_dir
from ..project import Project
from ..scaffold import apply_scaffold
from ..settings import ProjectorSettings, load_settings
from .base import BaseService


class CreateProjectService(BaseService[ConfigInput, Project]):
    """Orchestrate project creation.

    Steps run strictly in order: resolve config, scaffold, load manifest,
    plan links, commit workspace rewrites, issue ``add`` commands, install,
    then bind scripts. Every ``workspace:*`` rewrite is on disk before the
    first package-manager command runs.

    Partial state left by a failure (a created temp directory, copied
    template files) is not cleaned up.
    """

    def __init__(
        self,
        *,
        runner: CommandRunner | None = None,
        registry: ProcessRegistry | None = None,
        settings: ProjectorSettings | None = None,
    ) -> None:
        if registry is None:
            registry = (
                runner.registry if isinstance(runner, SubprocessCommandRunner) else ProcessRegistry()
            )
        self._processes = registry
        self._runner = runner or SubprocessCommandRunner(registry=registry)
        self._settings = settings or load_settings()

    def _run(self, request: ConfigInput) -> Project:
        config = resolve_config(request, settings=self._settings)
        root = config.directory
        log.debug(f"Creating project in {root} ({type(config.scaffold).__name__})")

        apply_scaffold(config)

        manifest = load_manifest(root)
        if config.package.enabled and manifest is None:
            raise PackageJsonMissingError(encode_dir(root))

        project = Project(
            directory=root,
            runner=self._runner,
            processes=self._processes,
            package_manager_executable=self._settings.package_manager,
            manifest=manifest,
        )

        links = request.links if config.package.enabled else []
        plan = plan_links(root, links, manifest)
        rewritten = apply_workspace_rewrites(root, plan.rewrites)
        if rewritten is not None:
            project.files.manifest = rewritten
        apply_link_adds(plan, project.package_manager)

        if config.package.install:
            log.debug(f"Installing dependencies in {root}")
            project.package_manager("install")

        project.bind_scripts(request.scripts)
        log.debug(f"Project ready at {root}")
        return project


def create(
    config: ConfigInput | Mapping[str, Any] | None = None,
    *,
    runner: CommandRunner | None = None,
    registry: ProcessRegistry | None = None,
    settings: ProjectorSettings | None = None,
) -> Project:
    """Create a project and return its handle.

    Args:
        config: ``ConfigInput`` or an equivalent mapping. ``None`` scaffolds
            an init project in a fresh temporary directory.
        runner: Command runner used for shell and package-manager commands.
        registry: Registry that ``Project.terminate`` signals. A custom
            runner must register its processes here for cancellation to
            reach them. Defaults to the registry of a
            ``SubprocessCommandRunner`` runner, or a fresh one.
        settings: Runtime settings; read from the environment when omitted.

    Returns:
        The ready ``Project``.

    Raises:
        InvalidDirectoryError: A supplied path is not an absolute directory.
        PackageJsonMissingError: Package management is enabled but the
            scaffolded project has no manifest.
        FileSystemError: A file-system or subprocess operation failed.
    """
    if config is None:
        request = ConfigInput()
    elif isinstance(config, ConfigInput):
        request = config
    else:
        request = ConfigInput.model_validate(dict(config))
    return CreateProjectService(runner=runner, registry=registry, settings=settings)(request)
