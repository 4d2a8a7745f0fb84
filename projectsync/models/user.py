"""User domain model: the acting principal."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass
class User:
    """A registered user; may author tasks and hold project memberships."""

    username: str
    email: str
    user_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    github_username: Optional[str] = None
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    updated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "github_username": self.github_username,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            user_id=row["user_id"],
            username=row["username"],
            email=row["email"],
            github_username=row.get("github_username"),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )
