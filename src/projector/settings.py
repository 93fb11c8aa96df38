"""Runtime settings for projector.

Settings are read from ``PROJECTOR_*`` environment variables and validated
with Pydantic.

Example:
    >>> load_settings({}).package_manager
    'pnpm'
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

ENV_PACKAGE_MANAGER = "PROJECTOR_PACKAGE_MANAGER"
ENV_TEMP_ROOT = "PROJECTOR_TEMP_ROOT"
DEFAULT_TEMP_ROOT = Path("/tmp")
DEFAULT_TEMP_PREFIX = "projector-"


class ProjectorSettings(BaseModel):
    """Tunable runtime settings.

    Attributes:
        package_manager: Executable used for package-manager commands.
        temp_root: Parent directory for synthesized project directories.
        temp_prefix: Name prefix for synthesized project directories.

    Example:
        >>> ProjectorSettings(package_manager="npm").package_manager
        'npm'
    """

    model_config = ConfigDict(frozen=True)

    package_manager: str = "pnpm"
    temp_root: Path = DEFAULT_TEMP_ROOT
    temp_prefix: str = DEFAULT_TEMP_PREFIX

    @field_validator("package_manager", mode="before")
    @classmethod
    def normalize_package_manager(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("package_manager must not be empty")
        return value

    @field_validator("temp_root")
    @classmethod
    def require_absolute_temp_root(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"temp_root must be absolute: {value}")
        return value


def load_settings(environ: Mapping[str, str] | None = None) -> ProjectorSettings:
    """Build settings from environment variables.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated ``ProjectorSettings``.

    Example:
        >>> load_settings({"PROJECTOR_TEMP_ROOT": "/var/tmp"}).temp_root
        PosixPath('/var/tmp')
    """
    env = os.environ if environ is None else environ
    payload: dict[str, object] = {}
    package_manager = env.get(ENV_PACKAGE_MANAGER)
    if package_manager:
        payload["package_manager"] = package_manager
    temp_root = env.get(ENV_TEMP_ROOT)
    if temp_root:
        payload["temp_root"] = temp_root
    return ProjectorSettings.model_validate(payload)
