"""Issue linker: keeps the local GitHub issue mirror in step with GitHub payloads."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from projectsync.db.database import Database
from projectsync.db.github_issue_repo import GithubIssueRepository
from projectsync.db.multi import Err, Ok, StepResult, constraint_error
from projectsync.models.changeset import Changeset
from projectsync.models.github import GithubIssue, GithubRepo

logger = logging.getLogger(__name__)

# GitHub payload key -> local column
_PAYLOAD_FIELDS = {
    "id": "github_id",
    "number": "number",
    "title": "title",
    "body": "body",
    "state": "state",
    "html_url": "html_url",
    "url": "url",
    "locked": "locked",
    "closed_at": "closed_at",
    "created_at": "github_created_at",
    "updated_at": "github_updated_at",
}

_FIELD_TYPES = {
    "github_id": int,
    "number": int,
    "title": str,
    "body": str,
    "state": str,
    "html_url": str,
    "url": str,
    "locked": bool,
    "closed_at": str,
    "github_created_at": str,
    "github_updated_at": str,
}


def issue_attributes(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    return {column: payload[key] for key, column in _PAYLOAD_FIELDS.items() if key in payload}


class IssueLinker:
    """Creates or updates the ``GithubIssue`` matching a GitHub issue payload."""

    def __init__(self, db: Database):
        self._db = db
        self._issue_repo = GithubIssueRepository(db)

    def create_or_update_issue(self, github_repo: GithubRepo, payload: dict[str, Any]) -> StepResult:
        """
        Upsert by GitHub's issue id and attach the record to *github_repo*.

        Returns ``Ok(GithubIssue)``, or ``Err(changeset)`` when the payload is
        missing required fields or violates a constraint.
        """
        attributes = issue_attributes(payload)
        existing = None
        if isinstance(attributes.get("github_id"), int):
            existing = self._issue_repo.get_by_github_id(attributes["github_id"])

        changeset = Changeset.cast(
            existing, attributes, _PAYLOAD_FIELDS.values(),
            action="update" if existing else "insert", types=_FIELD_TYPES,
        )
        changeset.put_change("github_repo_id", github_repo.github_repo_id)
        changeset.validate_required(["github_id", "number", "title"])
        if not changeset.valid:
            return Err(changeset)

        try:
            if existing:
                issue = self._issue_repo.update(existing.github_issue_id, **changeset.changes)
            else:
                issue = self._issue_repo.create(GithubIssue(**changeset.changes))
        except sqlite3.IntegrityError as e:
            changeset.add_error(*constraint_error(e))
            return Err(changeset)

        logger.info(
            "%s GitHub issue #%s for %s",
            "Updated" if existing else "Linked", issue.number, github_repo.slug,
        )
        return Ok(issue)
