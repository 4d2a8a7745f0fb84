"""Unit tests for the GitHub issue client and its configuration.

``requests`` is patched; no network access.
"""

from __future__ import annotations

import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from projectsync.config import GitHubConfig, get_github_config
from projectsync.integrations.github_client import GitHubAPIError, GitHubIssueAPI, issue_payload
from projectsync.models.github import GithubAppInstallation, GithubIssue, GithubRepo
from projectsync.models.task import Task, TaskStatus


def _linked_task(**overrides) -> Task:
    repo = GithubRepo(
        name="web", owner="acme",
        installation=GithubAppInstallation(github_id=77, access_token="ghs_token"),
    )
    defaults = dict(
        title="Fix login", markdown="Crash on submit",
        project_id="p1", user_id="u1", github_repo_id=repo.github_repo_id,
    )
    defaults.update(overrides)
    task = Task(**defaults)
    task.github_repo = repo
    return task


def _http_error(status: int, message: str) -> requests.HTTPError:
    response = MagicMock(status_code=status, text=f'{{"message": "{message}"}}')
    response.json.return_value = {"message": message}
    return requests.HTTPError(f"{status} Error", response=response)


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = get_github_config()
        self.assertEqual(cfg.api_base_url, "https://api.github.com")
        self.assertEqual(cfg.timeout_seconds, 10.0)

    def test_overrides(self):
        env = {"GITHUB_API_BASE_URL": "https://ghe.example.com/api/v3/", "GITHUB_TIMEOUT_SECONDS": "2.5"}
        with patch.dict(os.environ, env, clear=True):
            cfg = get_github_config()
        self.assertEqual(cfg.repo_url("acme", "web"), "https://ghe.example.com/api/v3/repos/acme/web")
        self.assertEqual(cfg.timeout_seconds, 2.5)


class TestIssuePayload(unittest.TestCase):
    def test_fields(self):
        task = _linked_task(status=TaskStatus.CLOSED)
        self.assertEqual(
            issue_payload(task),
            {"title": "Fix login", "body": "Crash on submit", "state": "closed"},
        )


class TestGitHubIssueAPI(unittest.TestCase):
    def setUp(self):
        self.api = GitHubIssueAPI(GitHubConfig(api_base_url="https://api.github.test", timeout_seconds=5))

    @patch("projectsync.integrations.github_client.requests.post")
    def test_create_posts_issue(self, mock_post):
        mock_post.return_value.json.return_value = {"id": 9001, "number": 42}

        payload = self.api.create(_linked_task())

        self.assertEqual(payload["number"], 42)
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://api.github.test/repos/acme/web/issues")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer ghs_token")
        self.assertEqual(kwargs["json"]["title"], "Fix login")
        self.assertEqual(kwargs["timeout"], 5)

    @patch("projectsync.integrations.github_client.requests.patch")
    def test_update_patches_linked_issue(self, mock_patch):
        mock_patch.return_value.json.return_value = {"id": 9001, "number": 42}
        task = _linked_task()
        task.github_issue = GithubIssue(
            github_repo_id=task.github_repo_id, github_id=9001, number=42, title="Fix login"
        )

        self.api.update(task)

        self.assertEqual(
            mock_patch.call_args.args[0], "https://api.github.test/repos/acme/web/issues/42"
        )

    @patch("projectsync.integrations.github_client.requests.patch")
    def test_update_requires_linked_issue(self, mock_patch):
        with self.assertRaises(GitHubAPIError):
            self.api.update(_linked_task())
        mock_patch.assert_not_called()

    @patch("projectsync.integrations.github_client.requests.post")
    def test_requires_preloaded_repo(self, mock_post):
        task = Task(title="Local", project_id="p1", user_id="u1")
        with self.assertRaises(GitHubAPIError):
            self.api.create(task)
        mock_post.assert_not_called()

    @patch("projectsync.integrations.github_client.requests.post")
    def test_requires_installation_token(self, mock_post):
        task = _linked_task()
        task.github_repo.installation = None
        with self.assertRaises(GitHubAPIError):
            self.api.create(task)
        mock_post.assert_not_called()

    @patch("projectsync.integrations.github_client.requests.post")
    def test_http_error(self, mock_post):
        mock_post.return_value.raise_for_status.side_effect = _http_error(422, "Validation Failed")

        with self.assertRaises(GitHubAPIError) as ctx:
            self.api.create(_linked_task())

        self.assertEqual(ctx.exception.status_code, 422)
        self.assertEqual(ctx.exception.message, "Validation Failed")
        self.assertIn("Validation Failed", ctx.exception.body)

    @patch("projectsync.integrations.github_client.requests.post")
    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(GitHubAPIError) as ctx:
            self.api.create(_linked_task())

        self.assertIsNone(ctx.exception.status_code)
        self.assertIn("connection refused", ctx.exception.message)

    @patch("projectsync.integrations.github_client.requests.post")
    def test_single_attempt_only(self, mock_post):
        mock_post.return_value.raise_for_status.side_effect = _http_error(502, "Bad Gateway")
        with self.assertRaises(GitHubAPIError):
            self.api.create(_linked_task())
        self.assertEqual(mock_post.call_count, 1)


if __name__ == "__main__":
    unittest.main()
