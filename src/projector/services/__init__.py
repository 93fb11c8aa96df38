from .base import BaseService
from .create_project import CreateProjectService, create

__all__ = [
    "BaseService",
    "CreateProjectService",
    "create",
]
