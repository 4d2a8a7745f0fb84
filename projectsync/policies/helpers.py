"""Lookups shared by authorization policies.

Every step accepts ``None`` and passes ``None`` along, so a missing task,
project or membership ends the chain in a plain ``False`` instead of an error.
"""

from __future__ import annotations

from typing import Optional

from projectsync.db.database import Database
from projectsync.db.project_repo import ProjectRepository
from projectsync.models.project import Project, ProjectRole, ProjectUser
from projectsync.models.task import Task
from projectsync.models.user import User


class MembershipResolver:
    """Read-only task → project → membership lookups."""

    def __init__(self, db: Database):
        self._project_repo = ProjectRepository(db)

    def get_project(self, task: Optional[Task]) -> Optional[Project]:
        if task is None:
            return None
        return self._project_repo.get_by_id(task.project_id)

    def get_membership(self, project: Optional[Project], user: User) -> Optional[ProjectUser]:
        if project is None:
            return None
        return self._project_repo.get_membership(project.project_id, user.user_id)


def get_role(membership: Optional[ProjectUser]) -> Optional[ProjectRole]:
    return membership.role if membership else None


def contributor_or_higher(role: Optional[ProjectRole]) -> bool:
    return role is not None and role.at_least(ProjectRole.CONTRIBUTOR)


def authored_by(user: User, task: Optional[Task]) -> bool:
    return task is not None and task.user_id == user.user_id
