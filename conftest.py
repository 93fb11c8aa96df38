# ruff: noqa: E402

import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import projector.log as projector_log

DOCTEST_MODULES = {
    SRC / "projector" / "__init__.py",
    SRC / "projector" / "cli.py",
    SRC / "projector" / "config.py",
    SRC / "projector" / "layout.py",
    SRC / "projector" / "links.py",
    SRC / "projector" / "manifest.py",
    SRC / "projector" / "paths.py",
    SRC / "projector" / "settings.py",
}


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROJECTOR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PROJECTOR_PACKAGE_MANAGER", raising=False)
    monkeypatch.delenv("PROJECTOR_TEMP_ROOT", raising=False)
    monkeypatch.delenv("PROJECTOR_NO_COLOR", raising=False)
    monkeypatch.setattr(projector_log, "_configured_level", None)


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
