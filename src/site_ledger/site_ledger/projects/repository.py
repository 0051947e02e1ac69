from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Project]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Project]:
        raise NotImplementedError

    def create(self, *, name: str, status: ProjectStatus) -> int:
        raise NotImplementedError

    def update(self, project_id: int, *, name: str, status: ProjectStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, project_id: int) -> bool:
        raise NotImplementedError
