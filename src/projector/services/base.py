"""Base service ABC.

Services extend BaseService and implement _run(request) -> T. They raise
ProjectorError on expected errors. __call__ catches ProjectorError and
invokes _handle_failure; the default logs and re-raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .. import log
from ..errors import ProjectorError

R = TypeVar("R")
T = TypeVar("T")


class BaseService(ABC, Generic[R, T]):
    """Abstract base for orchestration services."""

    def __call__(self, request: R) -> T:
        try:
            return self._run(request)
        except ProjectorError as e:
            return self._handle_failure(e)

    @abstractmethod
    def _run(self, request: R) -> T:
        """Execute the service logic. Raise ProjectorError on expected errors."""
        ...

    def _handle_failure(self, error: ProjectorError) -> T:
        """Handle ProjectorError. Default logs and re-raises."""
        log.debug(f"{type(self).__name__} failed [{error.code}]: {error}")
        raise
