from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository

_COLUMNS = "project_id, name, status, created_at"


def _to_project(row: dict) -> Project:
    return Project(
        project_id=int(row["project_id"]),
        name=row["name"],
        status=ProjectStatus(row["status"]),
        created_at=row.get("created_at"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE project_id=%s", (project_id,))
            row = fetchone(cur)
            return _to_project(row) if row else None

    def get_by_name(self, name: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_project(row) if row else None

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects ORDER BY created_at DESC, project_id DESC")
            return [_to_project(r) for r in fetchall(cur)]

    def create(self, *, name: str, status: ProjectStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO projects(name, status) VALUES(%s, %s)", (name, status.value))
            return int(cur.lastrowid)

    def update(self, project_id: int, *, name: str, status: ProjectStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE projects SET name=%s, status=%s WHERE project_id=%s",
                (name, status.value, project_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, project_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE project_id=%s", (project_id,))
            return cur.rowcount > 0
