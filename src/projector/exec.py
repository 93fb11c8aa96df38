"""Subprocess helpers for running shell commands inside a project."""

from __future__ import annotations

import os
import signal
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol

from . import log
from .errors import FileSystemError

SHELL_EXECUTABLE = "sh"


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request."""

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


class CommandRunner(Protocol):
    """Runtime command-execution interface.

    ``run`` returns ``None`` when the executable cannot be found.
    """

    def run(self, request: CommandRequest) -> CommandResult | None: ...


def _signal_process_group(process: subprocess.Popen[bytes]) -> bool:
    try:
        os.killpg(os.getpgid(process.pid), signal.SIGTERM)
    except ProcessLookupError:
        return False
    return True


def _decode_output(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class ProcessRegistry:
    """Tracks in-flight subprocesses so they can be terminated together.

    Each tracked process leads its own session, so terminating it signals the
    whole process group, including children of a compound shell command.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processes: list[subprocess.Popen[bytes]] = []

    def add(self, process: subprocess.Popen[bytes]) -> None:
        with self._lock:
            self._processes.append(process)

    def discard(self, process: subprocess.Popen[bytes]) -> None:
        with self._lock:
            if process in self._processes:
                self._processes.remove(process)

    def __len__(self) -> int:
        with self._lock:
            return len(self._processes)

    def terminate_all(self) -> int:
        """Terminate every tracked process and clear the registry.

        Processes that already exited are skipped. Live ones receive
        ``SIGTERM`` on their whole process group.

        Returns:
            Number of processes that were signalled.
        """
        with self._lock:
            processes = list(self._processes)
            self._processes.clear()
        signalled = 0
        for process in processes:
            if process.poll() is not None:
                continue
            if _signal_process_group(process):
                signalled += 1
        return signalled


class SubprocessCommandRunner:
    """Default command-runner adapter backed by ``subprocess.Popen``.

    Every spawned process starts a new session and is registered with
    ``registry`` until it exits. Output is decoded as UTF-8 with undecodable
    bytes replaced.
    """

    def __init__(self, registry: ProcessRegistry | None = None) -> None:
        self.registry = registry if registry is not None else ProcessRegistry()

    def run(self, request: CommandRequest) -> CommandResult | None:
        """Run ``request`` to completion.

        Returns:
            The command result, or ``None`` when the executable is missing.

        Raises:
            FileSystemError: If the process cannot be started for any other
                reason, such as a missing or unusable working directory.
        """
        try:
            process = subprocess.Popen(
                list(request.argv),
                cwd=request.cwd,
                env=request.env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=True,
            )
        except FileNotFoundError as exc:
            if exc.filename == request.argv[0]:
                return None
            raise FileSystemError("command execution", exc) from exc
        except OSError as exc:
            raise FileSystemError("command execution", exc) from exc
        self.registry.add(process)
        try:
            stdout, stderr = process.communicate()
        finally:
            self.registry.discard(process)
        return CommandResult(
            argv=request.argv,
            returncode=process.returncode,
            stdout=_decode_output(stdout),
            stderr=_decode_output(stderr),
        )


def run_with_runner(request: CommandRequest, *, runner: CommandRunner) -> CommandResult | None:
    """Execute a typed command request with the given runner."""
    return runner.run(request)


def _command_failure_detail(request: CommandRequest, result: CommandResult) -> str:
    output = (result.stderr or result.stdout or "").strip()
    command_text = " ".join(request.argv)
    if output:
        return f"exit {result.returncode}: {command_text}\n{output}"
    return f"exit {result.returncode}: {command_text}"


def run_shell(command: str, *, cwd: Path, runner: CommandRunner) -> str:
    """Run ``command`` through ``sh -c`` in ``cwd`` and return its stdout.

    Args:
        command: Shell command string.
        cwd: Working directory.
        runner: Command runner used to spawn the shell.

    Returns:
        Standard output text.

    Raises:
        FileSystemError: If the shell is missing or the command exits non-zero.
    """
    request = CommandRequest(argv=(SHELL_EXECUTABLE, "-c", command), cwd=cwd)
    log.trace(f"$ {command}  (cwd={cwd})")
    result = run_with_runner(request, runner=runner)
    if result is None:
        raise FileSystemError("command execution", f"missing required command: {SHELL_EXECUTABLE}")
    if result.returncode != 0:
        raise FileSystemError("command execution", _command_failure_detail(request, result))
    return result.stdout
