"""TaskSkill service: link and unlink skills on tasks, guarded by TaskSkillPolicy."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional, Union

from projectsync.db.database import Database
from projectsync.db.multi import constraint_error
from projectsync.db.task_skill_repo import TaskSkillRepository
from projectsync.models.task_skill import TaskSkill, TaskSkillChangeset
from projectsync.models.user import User
from projectsync.policies.task_skill_policy import TaskSkillPolicy

logger = logging.getLogger(__name__)


class PermissionDenied(Exception):
    """The acting user may not perform this action."""

    def __init__(self, user: User, action: str):
        super().__init__(f"User {user.user_id} is not allowed to {action}")
        self.user = user
        self.action = action


class TaskSkillService:
    def __init__(self, db: Database, policy: Optional[TaskSkillPolicy] = None):
        self._repo = TaskSkillRepository(db)
        self._policy = policy or TaskSkillPolicy(db)

    def create(self, user: User, attributes: dict[str, Any]) -> Union[TaskSkill, TaskSkillChangeset]:
        """Link a skill to a task. Returns the changeset if it is invalid."""
        changeset = TaskSkill.create_changeset(attributes)
        if not self._policy.can_create(user, changeset):
            raise PermissionDenied(user, "create task skill")
        if not changeset.valid:
            return changeset

        try:
            task_skill = self._repo.create(TaskSkill.from_changeset(changeset))
        except sqlite3.IntegrityError as e:
            changeset.add_error(*constraint_error(e))
            return changeset
        logger.info("Linked skill %s to task %s", task_skill.skill_id, task_skill.task_id)
        return task_skill

    def delete(self, user: User, task_skill_id: str) -> Optional[TaskSkill]:
        """Unlink a skill. Returns ``None`` when the link does not exist."""
        task_skill = self._repo.get_by_id(task_skill_id)
        if task_skill is None:
            return None
        if not self._policy.can_delete(user, task_skill):
            raise PermissionDenied(user, "delete task skill")
        self._repo.delete(task_skill_id)
        logger.info("Unlinked skill %s from task %s", task_skill.skill_id, task_skill.task_id)
        return task_skill
