"""Repository for the ``sync_log`` table: one row per task ↔ GitHub issue sync."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, Optional

from projectsync.db.database import Database


class SyncOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class SyncStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class SyncLogRepository:
    def __init__(self, db: Database):
        self._db = db

    def record(
        self,
        task_id: Optional[str],
        operation: SyncOperation,
        status: SyncStatus,
        message: Optional[str] = None,
    ) -> str:
        """Append an audit row. Joins the caller's transaction when one is open."""
        sync_log_id = str(uuid.uuid4())
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO sync_log (sync_log_id, task_id, operation, status, message)
                   VALUES (?, ?, ?, ?, ?)""",
                (sync_log_id, task_id, operation.value, status.value, message),
            )
        return sync_log_id

    def list_for_task(self, task_id: str) -> list[dict[str, Any]]:
        return self._db.fetchall(
            "SELECT * FROM sync_log WHERE task_id = ? ORDER BY created_at, rowid", (task_id,)
        )

    def list_failures(self) -> list[dict[str, Any]]:
        return self._db.fetchall(
            "SELECT * FROM sync_log WHERE status = ? ORDER BY created_at, rowid",
            (SyncStatus.FAILED.value,),
        )
