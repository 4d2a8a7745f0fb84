"""Database schema DDL: all table definitions for the project workspace."""

SCHEMA_DDL = """
PRAGMA journal_mode=WAL;
PRAGMA foreign_keys = ON;

-- ==========================================================================
-- Users
-- ==========================================================================
CREATE TABLE IF NOT EXISTS users (
    user_id         TEXT PRIMARY KEY,
    username        TEXT UNIQUE NOT NULL,
    email           TEXT UNIQUE NOT NULL,
    github_username TEXT,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_users_github ON users(github_username);

-- ==========================================================================
-- Projects and memberships
-- ==========================================================================
CREATE TABLE IF NOT EXISTS projects (
    project_id      TEXT PRIMARY KEY,
    title           TEXT NOT NULL,
    github_owner    TEXT,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS project_users (
    project_user_id TEXT PRIMARY KEY,
    project_id      TEXT NOT NULL REFERENCES projects(project_id) ON DELETE CASCADE,
    user_id         TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    role            TEXT NOT NULL DEFAULT 'pending'
                    CHECK(role IN ('pending','contributor','admin','owner')),
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    UNIQUE(project_id, user_id)
);

CREATE INDEX IF NOT EXISTS idx_project_users_user ON project_users(user_id);

-- ==========================================================================
-- GitHub installations, repositories and issues
-- ==========================================================================
CREATE TABLE IF NOT EXISTS github_app_installations (
    installation_id         TEXT PRIMARY KEY,
    github_id               INTEGER UNIQUE,
    access_token            TEXT,
    access_token_expires_at TEXT,
    created_at              TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at              TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS github_repos (
    github_repo_id  TEXT PRIMARY KEY,
    github_id       INTEGER UNIQUE,
    name            TEXT NOT NULL,
    owner           TEXT NOT NULL,
    installation_id TEXT REFERENCES github_app_installations(installation_id),
    project_id      TEXT REFERENCES projects(project_id),
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS github_issues (
    github_issue_id     TEXT PRIMARY KEY,
    github_repo_id      TEXT NOT NULL REFERENCES github_repos(github_repo_id),
    github_id           INTEGER UNIQUE NOT NULL,
    number              INTEGER NOT NULL,
    title               TEXT NOT NULL,
    body                TEXT,
    state               TEXT NOT NULL DEFAULT 'open',
    html_url            TEXT,
    url                 TEXT,
    locked              INTEGER NOT NULL DEFAULT 0,
    closed_at           TEXT,
    github_created_at   TEXT,
    github_updated_at   TEXT,
    created_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_github_issues_repo ON github_issues(github_repo_id, number);

-- ==========================================================================
-- Tasks
-- ==========================================================================
CREATE TABLE IF NOT EXISTS tasks (
    task_id             TEXT PRIMARY KEY,
    project_id          TEXT NOT NULL REFERENCES projects(project_id),
    user_id             TEXT NOT NULL REFERENCES users(user_id),
    title               TEXT NOT NULL,
    markdown            TEXT DEFAULT '',
    status              TEXT NOT NULL DEFAULT 'open'
                        CHECK(status IN ('open','closed')),
    closed_at           TEXT,
    github_repo_id      TEXT REFERENCES github_repos(github_repo_id),
    github_issue_id     TEXT REFERENCES github_issues(github_issue_id),
    created_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id);
CREATE INDEX IF NOT EXISTS idx_tasks_user ON tasks(user_id);
CREATE INDEX IF NOT EXISTS idx_tasks_github_issue ON tasks(github_issue_id);

-- ==========================================================================
-- Skills
-- ==========================================================================
CREATE TABLE IF NOT EXISTS skills (
    skill_id    TEXT PRIMARY KEY,
    title       TEXT UNIQUE NOT NULL,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS task_skills (
    task_skill_id   TEXT PRIMARY KEY,
    task_id         TEXT NOT NULL REFERENCES tasks(task_id) ON DELETE CASCADE,
    skill_id        TEXT NOT NULL REFERENCES skills(skill_id) ON DELETE CASCADE,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    UNIQUE(task_id, skill_id)
);

-- ==========================================================================
-- Task sync log (audit trail of GitHub issue mirroring)
-- task_id has no foreign key: failure rows outlive a rolled-back insert.
-- ==========================================================================
CREATE TABLE IF NOT EXISTS sync_log (
    sync_log_id TEXT PRIMARY KEY,
    task_id     TEXT,
    operation   TEXT NOT NULL CHECK (operation IN ('create', 'update')),
    status      TEXT NOT NULL CHECK (status IN ('success', 'failed')),
    message     TEXT,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_sync_log_task ON sync_log(task_id);
CREATE INDEX IF NOT EXISTS idx_sync_log_status ON sync_log(status);
"""
