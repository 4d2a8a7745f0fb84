"""Repository for ``projects`` and their ``project_users`` memberships."""

from __future__ import annotations

from typing import Optional

from projectsync.db.database import Database
from projectsync.models.project import Project, ProjectUser


class ProjectRepository:
    """Single-Responsibility repository for projects and memberships."""

    def __init__(self, db: Database):
        self._db = db

    # -- Projects --------------------------------------------------------------

    def create(self, project: Project) -> Project:
        with self._db.transaction() as conn:
            conn.execute(
                "INSERT INTO projects (project_id, title, github_owner) VALUES (?, ?, ?)",
                (project.project_id, project.title, project.github_owner),
            )
        return project

    def get_by_id(self, project_id: str) -> Optional[Project]:
        row = self._db.fetchone("SELECT * FROM projects WHERE project_id = ?", (project_id,))
        return Project.from_row(row) if row else None

    # -- Memberships -----------------------------------------------------------

    def add_member(self, membership: ProjectUser) -> ProjectUser:
        """Insert a membership. Raises on a duplicate (project, user) pair."""
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO project_users (project_user_id, project_id, user_id, role)
                   VALUES (?, ?, ?, ?)""",
                (
                    membership.project_user_id, membership.project_id,
                    membership.user_id, membership.role.value,
                ),
            )
        return membership

    def get_membership(self, project_id: str, user_id: str) -> Optional[ProjectUser]:
        row = self._db.fetchone(
            "SELECT * FROM project_users WHERE project_id = ? AND user_id = ?",
            (project_id, user_id),
        )
        return ProjectUser.from_row(row) if row else None
