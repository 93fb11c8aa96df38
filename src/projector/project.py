"""The project handle returned by ``projector.create``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from .config import ScriptFactory, ScriptRunner
from .exec import CommandRunner, ProcessRegistry, run_shell
from .layout import Layout
from .manifest import ManifestDocument


@dataclass
class ProjectFiles:
    """Parsed project files.

    Attributes:
        manifest: Parsed ``package.json``, if present.
    """

    manifest: ManifestDocument | None = None


class Project:
    """A scaffolded project directory with command and script runners.

    Construction is two-phase: every field is populated first, then
    ``bind_scripts`` hands the handle to the caller's script factory. Script
    bodies must not be invoked from inside the factory.

    Concurrent writers to the same project directory (including scripts that
    edit the manifest in parallel) are the caller's responsibility.
    """

    def __init__(
        self,
        *,
        directory: Path,
        runner: CommandRunner,
        processes: ProcessRegistry,
        package_manager_executable: str,
        manifest: ManifestDocument | None = None,
    ) -> None:
        self.dir = directory
        self.files = ProjectFiles(manifest=manifest)
        self.layout = Layout(directory)
        self.processes = processes
        self.run: dict[str, ScriptRunner] = {}
        self._runner = runner
        self._package_manager_executable = package_manager_executable

    def __repr__(self) -> str:
        return f"Project(dir={str(self.dir)!r}, scripts={sorted(self.run)!r})"

    def shell(self, command: str) -> str:
        """Run a shell command in the project root and return its stdout."""
        return run_shell(command, cwd=self.dir, runner=self._runner)

    def package_manager(self, command: str) -> str:
        """Run a package-manager command in the project root."""
        return self.shell(f"{self._package_manager_executable} {command}")

    def bind_scripts(self, factory: ScriptFactory | None) -> None:
        self.run = dict(factory(self)) if factory is not None else {}

    def terminate(self) -> int:
        """Terminate every subprocess this project still has running.

        Returns:
            Number of processes signalled.
        """
        return self.processes.terminate_all()

    def __enter__(self) -> Project:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.terminate()
