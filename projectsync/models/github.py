"""GitHub records: app installation, linked repository and mirrored issue."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass
class GithubAppInstallation:
    """Installation of the GitHub app; holds the token used for API calls."""

    github_id: Optional[int] = None
    installation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    access_token: Optional[str] = None
    access_token_expires_at: Optional[str] = None
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    updated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "installation_id": self.installation_id,
            "github_id": self.github_id,
            "access_token": self.access_token,
            "access_token_expires_at": self.access_token_expires_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GithubAppInstallation":
        return cls(
            installation_id=row["installation_id"],
            github_id=row.get("github_id"),
            access_token=row.get("access_token"),
            access_token_expires_at=row.get("access_token_expires_at"),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )


@dataclass
class GithubRepo:
    """A GitHub repository connected to a project."""

    name: str
    owner: str
    github_repo_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    github_id: Optional[int] = None
    installation_id: Optional[str] = None
    project_id: Optional[str] = None
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    updated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    # preloaded
    installation: Optional[GithubAppInstallation] = field(default=None, repr=False, compare=False)

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "github_repo_id": self.github_repo_id,
            "github_id": self.github_id,
            "name": self.name,
            "owner": self.owner,
            "installation_id": self.installation_id,
            "project_id": self.project_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GithubRepo":
        return cls(
            github_repo_id=row["github_repo_id"],
            github_id=row.get("github_id"),
            name=row["name"],
            owner=row["owner"],
            installation_id=row.get("installation_id"),
            project_id=row.get("project_id"),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )


@dataclass
class GithubIssue:
    """Local mirror of a GitHub issue."""

    github_repo_id: str
    github_id: int
    number: int
    title: str
    github_issue_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    body: Optional[str] = None
    state: str = "open"
    html_url: Optional[str] = None
    url: Optional[str] = None
    locked: bool = False
    closed_at: Optional[str] = None
    github_created_at: Optional[str] = None
    github_updated_at: Optional[str] = None
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    updated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "github_issue_id": self.github_issue_id,
            "github_repo_id": self.github_repo_id,
            "github_id": self.github_id,
            "number": self.number,
            "title": self.title,
            "body": self.body,
            "state": self.state,
            "html_url": self.html_url,
            "url": self.url,
            "locked": 1 if self.locked else 0,
            "closed_at": self.closed_at,
            "github_created_at": self.github_created_at,
            "github_updated_at": self.github_updated_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GithubIssue":
        return cls(
            github_issue_id=row["github_issue_id"],
            github_repo_id=row["github_repo_id"],
            github_id=row["github_id"],
            number=row["number"],
            title=row["title"],
            body=row.get("body"),
            state=row.get("state", "open"),
            html_url=row.get("html_url"),
            url=row.get("url"),
            locked=bool(row.get("locked", 0)),
            closed_at=row.get("closed_at"),
            github_created_at=row.get("github_created_at"),
            github_updated_at=row.get("github_updated_at"),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )
