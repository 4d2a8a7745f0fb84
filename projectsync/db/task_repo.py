"""Repository for the ``tasks`` table: CRUD plus association preloading."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from projectsync.db.database import Database
from projectsync.db.github_issue_repo import GithubIssueRepository
from projectsync.db.github_repo import GithubRepoRepository
from projectsync.db.multi import StaleEntryError
from projectsync.db.user_repo import UserRepository
from projectsync.models.changeset import Changeset
from projectsync.models.task import Task


class TaskRepository:
    """Single-Responsibility repository for task persistence."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, task: Task) -> Task:
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO tasks
                   (task_id, project_id, user_id, title, markdown, status,
                    closed_at, github_repo_id, github_issue_id)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task.task_id, task.project_id, task.user_id,
                    task.title, task.markdown, task.status.value,
                    task.closed_at, task.github_repo_id, task.github_issue_id,
                ),
            )
        return self.get_by_id(task.task_id)  # type: ignore[return-value]

    def insert_changeset(self, changeset: Changeset) -> Task:
        return self.create(Task.from_changeset(changeset))

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, task_id: Optional[str]) -> Optional[Task]:
        if task_id is None:
            return None
        row = self._db.fetchone("SELECT * FROM tasks WHERE task_id = ?", (task_id,))
        return Task.from_row(row) if row else None

    def count(self) -> int:
        row = self._db.fetchone("SELECT COUNT(*) AS n FROM tasks")
        return row["n"] if row else 0

    def preload(self, task: Task) -> Task:
        """Attach ``github_repo`` (with installation), ``github_issue`` and ``user``."""
        task.github_repo = (
            GithubRepoRepository(self._db).get_by_id(task.github_repo_id)
            if task.github_repo_id else None
        )
        task.github_issue = (
            GithubIssueRepository(self._db).get_by_id(task.github_issue_id)
            if task.github_issue_id else None
        )
        task.user = UserRepository(self._db).get_by_id(task.user_id)
        return task

    # -- Update ----------------------------------------------------------------

    def update(self, task_id: str, **fields: Any) -> Optional[Task]:
        if not fields:
            return self.get_by_id(task_id)

        allowed = {
            "title", "markdown", "status", "closed_at",
            "github_repo_id", "github_issue_id",
        }
        filtered = {k: v for k, v in fields.items() if k in allowed}
        if not filtered:
            return self.get_by_id(task_id)

        if "status" in filtered and hasattr(filtered["status"], "value"):
            filtered["status"] = filtered["status"].value

        set_parts = [f"{k} = ?" for k in filtered]
        set_parts.append("updated_at = ?")
        values = list(filtered.values())
        values.append(datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"))
        values.append(task_id)

        with self._db.transaction() as conn:
            conn.execute(
                f"UPDATE tasks SET {', '.join(set_parts)} WHERE task_id = ?",
                tuple(values),
            )
        return self.get_by_id(task_id)

    def update_changeset(self, changeset: Changeset) -> Task:
        task: Task = changeset.data
        updated = self.update(task.task_id, **changeset.changes)
        if updated is None:
            raise StaleEntryError(f"Task {task.task_id} not found")
        return updated
