"""
Central configuration loader.
Reads from environment variables (via .env).
NEVER prints secret values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")


def _get(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    val = os.getenv(key, default)
    if required and not val:
        raise EnvironmentError(f"Missing required environment variable: {key}")
    return val


# ---------------------------------------------------------------------------
# GitHub config
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GitHubConfig:
    api_base_url: str
    timeout_seconds: float

    def repo_url(self, owner: str, name: str) -> str:
        return f"{self.api_base_url}/repos/{owner}/{name}"


def get_github_config() -> GitHubConfig:
    return GitHubConfig(
        api_base_url=_get("GITHUB_API_BASE_URL", default="https://api.github.com").rstrip("/"),  # type: ignore[union-attr]
        timeout_seconds=float(_get("GITHUB_TIMEOUT_SECONDS", default="10")),  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_db_path() -> Path:
    override = _get("PROJECTSYNC_DB_PATH")
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "projectsync.db"
