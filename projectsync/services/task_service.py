"""Task service: create/update tasks and mirror them to GitHub atomically.

Both operations run a two-step ``Multi``: persist the task locally, then
sync it to GitHub when the task belongs to a connected repository. The
GitHub call happens inside the open transaction, so a failed sync rolls the
local write back as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from projectsync.db.database import Database
from projectsync.db.multi import Err, Multi, MultiResult, Ok, StepResult
from projectsync.db.sync_log_repo import SyncLogRepository, SyncOperation, SyncStatus
from projectsync.db.task_repo import TaskRepository
from projectsync.integrations.github_client import GitHubAPIError, GitHubIssueAPI
from projectsync.models.changeset import Changeset
from projectsync.models.task import Task
from projectsync.services.issue_linker import IssueLinker
from projectsync.utils.redact import redact_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """The task attributes were rejected; nothing was written."""

    changeset: Changeset

    @property
    def errors(self) -> dict[str, list[str]]:
        return self.changeset.errors


@dataclass(frozen=True)
class ExternalSyncFailure:
    """Syncing with GitHub failed; the local change was rolled back."""

    reason: str = "github"


TaskResult = Union[Task, ValidationFailure, ExternalSyncFailure]


class TaskService:
    """
    Facade for task writes that must stay consistent with GitHub.

    Dependencies are injected so the service can be tested with a mocked
    GitHub API.
    """

    def __init__(
        self,
        db: Database,
        github_api: Optional[Any] = None,
        issue_linker: Optional[IssueLinker] = None,
    ):
        self._db = db
        self._task_repo = TaskRepository(db)
        self._sync_log = SyncLogRepository(db)
        self._github = github_api or GitHubIssueAPI()
        self._linker = issue_linker or IssueLinker(db)

    # -- Public API ------------------------------------------------------------

    def create(self, attributes: dict[str, Any]) -> TaskResult:
        """Insert a task, then open a GitHub issue for it if its repo is connected."""
        changeset = Task.create_changeset(attributes)
        result = (
            Multi()
            .insert("task", changeset, self._task_repo.insert_changeset)
            .run("github", lambda changes: self._create_on_github(changes["task"]))
            .transaction(self._db)
        )
        return self._marshall_result(result, SyncOperation.CREATE)

    def update(self, task: Task, attributes: dict[str, Any]) -> TaskResult:
        """Update a task, then push the change to its GitHub issue if connected."""
        changeset = Task.update_changeset(task, attributes)
        result = (
            Multi()
            .update("task", changeset, self._task_repo.update_changeset)
            .run("github", lambda changes: self._update_on_github(changes["task"]))
            .transaction(self._db)
        )
        return self._marshall_result(result, SyncOperation.UPDATE, task_id=task.task_id)

    # -- Result handling -------------------------------------------------------

    def _marshall_result(
        self, result: MultiResult, operation: SyncOperation, task_id: Optional[str] = None
    ) -> TaskResult:
        if result.ok:
            return result.changes["github"]
        if result.failed_step == "task":
            return ValidationFailure(result.failed_value)

        if task_id is None and "task" in result.changes:
            task_id = result.changes["task"].task_id
        detail = redact_text(_describe(result.failed_value))
        logger.info("An error occurred when creating/updating the task with the GitHub API")
        logger.info("%s", detail)
        # Written after the rollback so the audit row survives it.
        self._sync_log.record(task_id, operation, SyncStatus.FAILED, detail)
        return ExternalSyncFailure()

    # -- GitHub steps ----------------------------------------------------------

    def _create_on_github(self, task: Task) -> StepResult:
        if task.github_repo_id is None:
            return Ok(task)

        try:
            task = self._task_repo.preload(task)
            payload = self._github.create(task)
            linked = self._linker.create_or_update_issue(task.github_repo, payload)
        except Exception as e:
            return Err(e)
        if isinstance(linked, Err):
            return linked

        github_issue = linked.value
        updated = self._task_repo.update(task.task_id, github_issue_id=github_issue.github_issue_id)
        self._sync_log.record(
            task.task_id, SyncOperation.CREATE, SyncStatus.SUCCESS, f"Created #{github_issue.number}"
        )
        return Ok(self._task_repo.preload(updated))

    def _update_on_github(self, task: Task) -> StepResult:
        if task.github_repo_id is None:
            return Ok(task)

        try:
            task = self._task_repo.preload(task)
            payload = self._github.update(task)
            # The linked issue is refreshed but the task keeps its current link.
            linked = self._linker.create_or_update_issue(task.github_repo, payload)
        except Exception as e:
            return Err(e)
        if isinstance(linked, Err):
            return linked

        self._sync_log.record(
            task.task_id, SyncOperation.UPDATE, SyncStatus.SUCCESS, f"Updated #{linked.value.number}"
        )
        return Ok(task)


def _describe(failure: Any) -> str:
    if isinstance(failure, Changeset):
        return f"Issue link rejected: {failure.errors}"
    if isinstance(failure, GitHubAPIError):
        return f"{failure!r} body={failure.body}"
    return repr(failure)
