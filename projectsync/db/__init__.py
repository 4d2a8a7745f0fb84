"""Database layer: SQLite with nested ACID transactions and repository pattern."""

from projectsync.db.database import Database, get_db, reset_db
from projectsync.db.multi import Err, Multi, MultiResult, Ok, StaleEntryError
from projectsync.db.schema import SCHEMA_DDL

__all__ = ["Database", "get_db", "reset_db", "Multi", "MultiResult", "Ok", "Err", "StaleEntryError", "SCHEMA_DDL"]
