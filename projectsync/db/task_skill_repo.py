"""Repository for ``skills`` and the ``task_skills`` association."""

from __future__ import annotations

from typing import Optional

from projectsync.db.database import Database
from projectsync.models.task_skill import Skill, TaskSkill


class SkillRepository:
    def __init__(self, db: Database):
        self._db = db

    def create(self, skill: Skill) -> Skill:
        with self._db.transaction() as conn:
            conn.execute(
                "INSERT INTO skills (skill_id, title) VALUES (?, ?)",
                (skill.skill_id, skill.title),
            )
        return skill

    def get_by_id(self, skill_id: str) -> Optional[Skill]:
        row = self._db.fetchone("SELECT * FROM skills WHERE skill_id = ?", (skill_id,))
        return Skill.from_row(row) if row else None


class TaskSkillRepository:
    """Single-Responsibility repository for task ↔ skill links."""

    def __init__(self, db: Database):
        self._db = db

    def create(self, task_skill: TaskSkill) -> TaskSkill:
        """Insert a link. Raises on duplicate (task, skill) or missing references."""
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO task_skills (task_skill_id, task_id, skill_id)
                   VALUES (?, ?, ?)""",
                (task_skill.task_skill_id, task_skill.task_id, task_skill.skill_id),
            )
        return task_skill

    def get_by_id(self, task_skill_id: str) -> Optional[TaskSkill]:
        row = self._db.fetchone(
            "SELECT * FROM task_skills WHERE task_skill_id = ?", (task_skill_id,)
        )
        return TaskSkill.from_row(row) if row else None

    def list_by_task(self, task_id: str) -> list[TaskSkill]:
        rows = self._db.fetchall(
            "SELECT * FROM task_skills WHERE task_id = ? ORDER BY created_at", (task_id,)
        )
        return [TaskSkill.from_row(r) for r in rows]

    def delete(self, task_skill_id: str) -> bool:
        with self._db.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM task_skills WHERE task_skill_id = ?", (task_skill_id,)
            )
        return cursor.rowcount > 0
