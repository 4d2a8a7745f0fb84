"""Skill and TaskSkill models.

A task-skill authorization target is either a pending ``TaskSkillChangeset``
(the association about to be created) or a persisted ``TaskSkill``. Both
expose ``target_task_id`` so policies can resolve the task uniformly.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

from projectsync.models.changeset import Changeset


@dataclass
class Skill:
    title: str
    skill_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> dict[str, Any]:
        return {"skill_id": self.skill_id, "title": self.title, "created_at": self.created_at}

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Skill":
        return cls(
            skill_id=row["skill_id"],
            title=row["title"],
            created_at=row.get("created_at", ""),
        )


@dataclass
class TaskSkillChangeset(Changeset):
    """A TaskSkill that has been requested but not yet inserted."""

    @property
    def target_task_id(self) -> Optional[str]:
        return self.changes.get("task_id")


@dataclass
class TaskSkill:
    """Association between a task and a skill it requires."""

    task_id: str
    skill_id: str
    task_skill_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    @property
    def target_task_id(self) -> Optional[str]:
        return self.task_id

    @staticmethod
    def create_changeset(attributes: dict[str, Any]) -> TaskSkillChangeset:
        base = Changeset.cast(
            None, attributes, ("task_id", "skill_id"), types={"task_id": str, "skill_id": str}
        )
        cs = TaskSkillChangeset(data=None, changes=base.changes, errors=base.errors, action="insert")
        cs.validate_required(["task_id", "skill_id"])
        return cs

    @classmethod
    def from_changeset(cls, changeset: Changeset) -> "TaskSkill":
        return cls(**changeset.changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_skill_id": self.task_skill_id,
            "task_id": self.task_id,
            "skill_id": self.skill_id,
            "created_at": self.created_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "TaskSkill":
        return cls(
            task_skill_id=row["task_skill_id"],
            task_id=row["task_id"],
            skill_id=row["skill_id"],
            created_at=row.get("created_at", ""),
        )


TaskSkillTarget = Union[TaskSkillChangeset, TaskSkill]
