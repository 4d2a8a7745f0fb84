"""Authorization policy for creating and deleting TaskSkill records."""

from __future__ import annotations

from typing import Callable, Optional

from projectsync.db.database import Database
from projectsync.db.task_repo import TaskRepository
from projectsync.models.task import Task
from projectsync.models.task_skill import TaskSkill, TaskSkillChangeset, TaskSkillTarget
from projectsync.models.user import User
from projectsync.policies.helpers import (
    MembershipResolver,
    authored_by,
    contributor_or_higher,
    get_role,
)

Check = Callable[[User, Optional[Task]], bool]


class TaskSkillPolicy:
    """
    A user may link skills to, or unlink skills from, a task when they are a
    contributor (or higher) on the task's project, or when they wrote the task.
    """

    def __init__(self, db: Database):
        self._task_repo = TaskRepository(db)
        self._resolver = MembershipResolver(db)
        self._checks: list[Check] = [self._contributor_or_higher, authored_by]

    def can_create(self, user: User, changeset: TaskSkillChangeset) -> bool:
        return self._allowed(user, changeset)

    def can_delete(self, user: User, task_skill: TaskSkill) -> bool:
        return self._allowed(user, task_skill)

    # -- internal --------------------------------------------------------------

    def _allowed(self, user: User, target: TaskSkillTarget) -> bool:
        task = self._task_repo.get_by_id(target.target_task_id)
        return any(check(user, task) for check in self._checks)

    def _contributor_or_higher(self, user: User, task: Optional[Task]) -> bool:
        project = self._resolver.get_project(task)
        membership = self._resolver.get_membership(project, user)
        return contributor_or_higher(get_role(membership))
