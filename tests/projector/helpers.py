# ruff: noqa: E402

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from projector.exec import CommandRequest, CommandResult
from projector.settings import ProjectorSettings


@dataclass
class RecordedCommand:
    command: str
    cwd: Path | None
    manifest: dict | None


@dataclass
class RecordingRunner:
    """Fake command runner that records shell commands instead of running them.

    Each record captures the manifest as it was on disk when the command ran.
    """

    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    calls: list[RecordedCommand] = field(default_factory=list)

    def run(self, request: CommandRequest) -> CommandResult | None:
        assert request.argv[:2] == ("sh", "-c")
        manifest = None
        if request.cwd is not None and (request.cwd / "package.json").exists():
            manifest = json.loads((request.cwd / "package.json").read_text(encoding="utf-8"))
        self.calls.append(RecordedCommand(request.argv[2], request.cwd, manifest))
        return CommandResult(
            argv=request.argv,
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
        )

    @property
    def commands(self) -> list[str]:
        return [call.command for call in self.calls]


def settings_for(tmp_path: Path, **overrides: object) -> ProjectorSettings:
    payload: dict[str, object] = {"temp_root": tmp_path / "tmp"}
    payload.update(overrides)
    return ProjectorSettings.model_validate(payload)


def write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def read_json(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))
