"""Project and membership models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ProjectRole(str, Enum):
    """Membership role, ordered from least to most privileged."""

    PENDING = "pending"
    CONTRIBUTOR = "contributor"
    ADMIN = "admin"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_ORDER.index(self)

    def at_least(self, other: "ProjectRole") -> bool:
        return self.rank >= other.rank


_ROLE_ORDER = [ProjectRole.PENDING, ProjectRole.CONTRIBUTOR, ProjectRole.ADMIN, ProjectRole.OWNER]


@dataclass
class Project:
    title: str
    project_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    github_owner: Optional[str] = None
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    updated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "title": self.title,
            "github_owner": self.github_owner,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Project":
        return cls(
            project_id=row["project_id"],
            title=row["title"],
            github_owner=row.get("github_owner"),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )


@dataclass
class ProjectUser:
    """A user's membership in a project."""

    project_id: str
    user_id: str
    role: ProjectRole = ProjectRole.PENDING
    project_user_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    updated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_user_id": self.project_user_id,
            "project_id": self.project_id,
            "user_id": self.user_id,
            "role": self.role.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ProjectUser":
        return cls(
            project_user_id=row["project_user_id"],
            project_id=row["project_id"],
            user_id=row["user_id"],
            role=ProjectRole(row.get("role", "pending")),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )
