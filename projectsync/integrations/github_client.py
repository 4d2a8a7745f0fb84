"""
GitHub Issues API client used to mirror tasks.

Authenticates with the access token of the app installation that owns the
task's repository. Makes exactly one request per call; callers decide
whether to retry.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from projectsync.config import GitHubConfig, get_github_config
from projectsync.models.github import GithubRepo
from projectsync.models.task import Task

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """A GitHub request failed, or could not be built from the task."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __repr__(self) -> str:
        return f"GitHubAPIError(status_code={self.status_code!r}, message={self.message!r})"


def issue_payload(task: Task) -> dict[str, Any]:
    """Issue fields GitHub receives for *task*."""
    return {
        "title": task.title,
        "body": task.markdown or "",
        "state": task.status.value,
    }


class GitHubIssueAPI:
    """Creates and updates the GitHub issue mirroring a preloaded task."""

    def __init__(self, config: Optional[GitHubConfig] = None):
        self.config = config or get_github_config()

    def _headers(self, repo: GithubRepo) -> dict[str, str]:
        installation = repo.installation
        if installation is None or not installation.access_token:
            raise GitHubAPIError(f"No installation access token for {repo.slug}")
        return {
            "Authorization": f"Bearer {installation.access_token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    @staticmethod
    def _require_repo(task: Task) -> GithubRepo:
        if task.github_repo is None:
            raise GitHubAPIError(f"Task {task.task_id} has no preloaded GitHub repository")
        return task.github_repo

    # -- Issue operations ------------------------------------------------------

    def create(self, task: Task) -> dict[str, Any]:
        """Open a new issue for *task*; returns GitHub's issue payload."""
        repo = self._require_repo(task)
        url = f"{self.config.repo_url(repo.owner, repo.name)}/issues"
        logger.info("Creating GitHub issue for task %s in %s", task.task_id, repo.slug)
        return self._send(requests.post, url, self._headers(repo), issue_payload(task))

    def update(self, task: Task) -> dict[str, Any]:
        """Push *task*'s fields to its linked issue; returns GitHub's issue payload."""
        repo = self._require_repo(task)
        if task.github_issue is None:
            raise GitHubAPIError(f"Task {task.task_id} is not linked to a GitHub issue")
        number = task.github_issue.number
        url = f"{self.config.repo_url(repo.owner, repo.name)}/issues/{number}"
        logger.info("Updating GitHub issue #%s for task %s in %s", number, task.task_id, repo.slug)
        return self._send(requests.patch, url, self._headers(repo), issue_payload(task))

    # -- internal --------------------------------------------------------------

    def _send(self, method, url: str, headers: dict[str, str], payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = method(url, headers=headers, json=payload, timeout=self.config.timeout_seconds)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            response = e.response
            status = response.status_code if response is not None else None
            body = response.text if response is not None else None
            raise GitHubAPIError(_error_message(response, str(e)), status, body) from e
        except requests.RequestException as e:
            raise GitHubAPIError(f"GitHub request failed: {e}") from e


def _error_message(response: Optional[requests.Response], fallback: str) -> str:
    if response is None:
        return fallback
    try:
        return response.json().get("message", fallback)
    except (ValueError, AttributeError):
        return fallback
