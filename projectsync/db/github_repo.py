"""Repository for ``github_repos`` and ``github_app_installations``."""

from __future__ import annotations

from typing import Optional

from projectsync.db.database import Database
from projectsync.models.github import GithubAppInstallation, GithubRepo


class GithubRepoRepository:
    """Connected repositories and the app installations that grant access."""

    def __init__(self, db: Database):
        self._db = db

    # -- Installations ---------------------------------------------------------

    def create_installation(self, installation: GithubAppInstallation) -> GithubAppInstallation:
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO github_app_installations
                   (installation_id, github_id, access_token, access_token_expires_at)
                   VALUES (?, ?, ?, ?)""",
                (
                    installation.installation_id, installation.github_id,
                    installation.access_token, installation.access_token_expires_at,
                ),
            )
        return installation

    # -- Repositories ----------------------------------------------------------

    def create(self, repo: GithubRepo) -> GithubRepo:
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO github_repos
                   (github_repo_id, github_id, name, owner, installation_id, project_id)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    repo.github_repo_id, repo.github_id, repo.name, repo.owner,
                    repo.installation_id, repo.project_id,
                ),
            )
        return repo

    def get_by_id(self, github_repo_id: str) -> Optional[GithubRepo]:
        """Return the repository with its ``installation`` attached."""
        row = self._db.fetchone(
            "SELECT * FROM github_repos WHERE github_repo_id = ?", (github_repo_id,)
        )
        if not row:
            return None
        repo = GithubRepo.from_row(row)
        if repo.installation_id:
            inst = self._db.fetchone(
                "SELECT * FROM github_app_installations WHERE installation_id = ?",
                (repo.installation_id,),
            )
            repo.installation = GithubAppInstallation.from_row(inst) if inst else None
        return repo
