"""Multi-step unit of work run inside a single database transaction.

Steps are named and ordered. Each step receives the values produced by the
steps before it and returns ``Ok(value)`` or ``Err(reason)``. The first
``Err`` rolls back every write made by the whole multi.

    result = (
        Multi()
        .insert("task", changeset, task_repo.insert_changeset)
        .run("github", lambda changes: sync(changes["task"]))
        .transaction(db)
    )
"""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from projectsync.db.database import Database
from projectsync.models.changeset import Changeset


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Err:
    reason: Any


StepResult = Union[Ok, Err]
Step = Callable[[dict[str, Any]], StepResult]


@dataclass
class MultiResult:
    """Outcome of ``Multi.transaction``.

    On failure ``changes`` holds the values of the steps that ran before
    ``failed_step``; none of their writes were committed.
    """

    ok: bool
    changes: dict[str, Any] = field(default_factory=dict)
    failed_step: Optional[str] = None
    failed_value: Any = None


class StaleEntryError(LookupError):
    """The row a changeset updates no longer exists."""


class _Abort(Exception):
    def __init__(self, step: str, value: Any):
        super().__init__(step)
        self.step = step
        self.value = value


class Multi:
    def __init__(self) -> None:
        self._steps: list[tuple[str, Step]] = []
        self._changesets: list[tuple[str, Changeset]] = []

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self._steps]

    def insert(self, name: str, changeset: Changeset, persist: Callable[[Changeset], Any]) -> "Multi":
        self._changesets.append((name, changeset))
        return self._add(name, lambda _changes: _persist(changeset, persist))

    def update(self, name: str, changeset: Changeset, persist: Callable[[Changeset], Any]) -> "Multi":
        self._changesets.append((name, changeset))
        return self._add(name, lambda _changes: _persist(changeset, persist))

    def run(self, name: str, fn: Step) -> "Multi":
        return self._add(name, fn)

    def _add(self, name: str, step: Step) -> "Multi":
        if name in self.names:
            raise ValueError(f"Duplicate step name: {name}")
        self._steps.append((name, step))
        return self

    def transaction(self, db: Database) -> MultiResult:
        # Invalid changesets fail before any SQL is issued.
        for name, changeset in self._changesets:
            if not changeset.valid:
                return MultiResult(ok=False, failed_step=name, failed_value=changeset)

        changes: dict[str, Any] = {}
        try:
            with db.transaction():
                for name, step in self._steps:
                    result = step(dict(changes))
                    if isinstance(result, Err):
                        raise _Abort(name, result.reason)
                    if not isinstance(result, Ok):
                        raise TypeError(f"Step {name!r} must return Ok or Err, got {result!r}")
                    changes[name] = result.value
        except _Abort as abort:
            return MultiResult(
                ok=False, changes=changes, failed_step=abort.step, failed_value=abort.value
            )
        return MultiResult(ok=True, changes=changes)


# -- changeset persistence -----------------------------------------------------

_CONSTRAINT_RE = re.compile(r"(UNIQUE|NOT NULL) constraint failed: \w+\.(\w+)")


def _persist(changeset: Changeset, persist: Callable[[Changeset], Any]) -> StepResult:
    if not changeset.valid:
        return Err(changeset)
    try:
        return Ok(persist(changeset))
    except sqlite3.IntegrityError as e:
        key, message = constraint_error(e)
        changeset.add_error(key, message)
        return Err(changeset)
    except StaleEntryError:
        changeset.add_error("base", "no longer exists")
        return Err(changeset)


def constraint_error(error: sqlite3.IntegrityError) -> tuple[str, str]:
    """Translate an SQLite constraint violation into a changeset error."""
    text = str(error)
    match = _CONSTRAINT_RE.search(text)
    if match and match.group(1) == "UNIQUE":
        return match.group(2), "has already been taken"
    if match:
        return match.group(2), "can't be blank"
    if "FOREIGN KEY" in text:
        return "base", "references a record that does not exist"
    return "base", text
