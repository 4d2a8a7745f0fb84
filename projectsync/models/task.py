"""Task domain model: project work item, optionally mirrored to a GitHub issue."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from projectsync.models.changeset import Changeset
from projectsync.models.github import GithubIssue, GithubRepo
from projectsync.models.user import User


class TaskStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


CREATE_FIELDS = ("title", "markdown", "status", "project_id", "user_id", "github_repo_id")
UPDATE_FIELDS = ("title", "markdown", "status")
TITLE_MAX_LENGTH = 255
FIELD_TYPES = {key: str for key in CREATE_FIELDS}


@dataclass
class Task:
    """A unit of work in a project. Linked to a GitHub issue once mirrored."""

    title: str
    project_id: str
    user_id: str
    task_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    markdown: str = ""
    status: TaskStatus = TaskStatus.OPEN
    closed_at: Optional[str] = None
    github_repo_id: Optional[str] = None
    github_issue_id: Optional[str] = None
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    updated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    # preloaded associations
    github_repo: Optional[GithubRepo] = field(default=None, repr=False, compare=False)
    github_issue: Optional[GithubIssue] = field(default=None, repr=False, compare=False)
    user: Optional[User] = field(default=None, repr=False, compare=False)

    # -- Changesets ------------------------------------------------------------

    @staticmethod
    def create_changeset(attributes: dict[str, Any]) -> Changeset:
        cs = Changeset.cast(None, attributes, CREATE_FIELDS, action="insert", types=FIELD_TYPES)
        cs.validate_required(["title", "project_id", "user_id"])
        _validate_common(cs)
        if cs.changes.get("status") == TaskStatus.CLOSED.value:
            cs.put_change("closed_at", _now())
        return cs

    @staticmethod
    def update_changeset(task: "Task", attributes: dict[str, Any]) -> Changeset:
        cs = Changeset.cast(task, attributes, UPDATE_FIELDS, action="update", types=FIELD_TYPES)
        cs.validate_required(["title"])
        _validate_common(cs)
        status = cs.changes.get("status")
        if status == TaskStatus.CLOSED.value:
            cs.put_change("closed_at", _now())
        elif status == TaskStatus.OPEN.value:
            cs.put_change("closed_at", None)
        return cs

    @classmethod
    def from_changeset(cls, changeset: Changeset) -> "Task":
        changes = dict(changeset.changes)
        if "status" in changes:
            changes["status"] = TaskStatus(changes["status"])
        return cls(**changes)

    # -- Serialisation ---------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_id": self.task_id,
            "project_id": self.project_id,
            "user_id": self.user_id,
            "title": self.title,
            "markdown": self.markdown,
            "status": self.status.value,
            "closed_at": self.closed_at,
            "github_repo_id": self.github_repo_id,
            "github_issue_id": self.github_issue_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Task":
        return cls(
            task_id=row["task_id"],
            project_id=row["project_id"],
            user_id=row["user_id"],
            title=row["title"],
            markdown=row.get("markdown") or "",
            status=TaskStatus(row.get("status", "open")),
            closed_at=row.get("closed_at"),
            github_repo_id=row.get("github_repo_id"),
            github_issue_id=row.get("github_issue_id"),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )


def _validate_common(cs: Changeset) -> None:
    cs.validate_length("title", min=1, max=TITLE_MAX_LENGTH)
    cs.validate_inclusion("status", [s.value for s in TaskStatus])


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
