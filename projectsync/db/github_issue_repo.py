"""Repository for the ``github_issues`` table."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from projectsync.db.database import Database
from projectsync.models.github import GithubIssue


class GithubIssueRepository:
    """Single-Responsibility repository for mirrored GitHub issues."""

    def __init__(self, db: Database):
        self._db = db

    def create(self, issue: GithubIssue) -> GithubIssue:
        row = issue.to_dict()
        columns = [k for k in row if k not in ("created_at", "updated_at")]
        with self._db.transaction() as conn:
            conn.execute(
                f"INSERT INTO github_issues ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' for _ in columns)})",
                tuple(row[k] for k in columns),
            )
        return self.get_by_id(issue.github_issue_id)  # type: ignore[return-value]

    def get_by_id(self, github_issue_id: str) -> Optional[GithubIssue]:
        row = self._db.fetchone(
            "SELECT * FROM github_issues WHERE github_issue_id = ?", (github_issue_id,)
        )
        return GithubIssue.from_row(row) if row else None

    def get_by_github_id(self, github_id: int) -> Optional[GithubIssue]:
        row = self._db.fetchone(
            "SELECT * FROM github_issues WHERE github_id = ?", (github_id,)
        )
        return GithubIssue.from_row(row) if row else None

    def count(self) -> int:
        row = self._db.fetchone("SELECT COUNT(*) AS n FROM github_issues")
        return row["n"] if row else 0

    def update(self, github_issue_id: str, **fields: Any) -> Optional[GithubIssue]:
        allowed = {
            "github_repo_id", "number", "title", "body", "state", "html_url", "url",
            "locked", "closed_at", "github_created_at", "github_updated_at",
        }
        filtered = {k: v for k, v in fields.items() if k in allowed}
        if not filtered:
            return self.get_by_id(github_issue_id)

        if "locked" in filtered:
            filtered["locked"] = 1 if filtered["locked"] else 0

        set_parts = [f"{k} = ?" for k in filtered]
        set_parts.append("updated_at = ?")
        values = list(filtered.values())
        values.append(datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"))
        values.append(github_issue_id)

        with self._db.transaction() as conn:
            conn.execute(
                f"UPDATE github_issues SET {', '.join(set_parts)} WHERE github_issue_id = ?",
                tuple(values),
            )
        return self.get_by_id(github_issue_id)
