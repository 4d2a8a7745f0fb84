"""Repository for the ``users`` table."""

from __future__ import annotations

from typing import Optional

from projectsync.db.database import Database
from projectsync.models.user import User


class UserRepository:
    """Single-Responsibility repository for user persistence."""

    def __init__(self, db: Database):
        self._db = db

    def create(self, user: User) -> User:
        """Insert a new user. Raises on duplicate username or email."""
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO users (user_id, username, email, github_username)
                   VALUES (?, ?, ?, ?)""",
                (user.user_id, user.username, user.email, user.github_username),
            )
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._db.fetchone("SELECT * FROM users WHERE user_id = ?", (user_id,))
        return User.from_row(row) if row else None
