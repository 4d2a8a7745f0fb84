"""Changeset: a validated set of attribute changes for one entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union


@dataclass
class Changeset:
    """
    Attribute changes cast from untrusted input, plus validation errors.

    ``data`` is the persisted entity being changed (``None`` for inserts).
    Only keys passed through ``cast()`` ever reach ``changes``.
    """

    data: Any = None
    changes: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict)
    action: str = "insert"

    @property
    def valid(self) -> bool:
        return not self.errors

    # -- building --------------------------------------------------------------

    @classmethod
    def cast(
        cls,
        data: Any,
        attributes: dict[str, Any],
        permitted: Iterable[str],
        action: str = "insert",
        types: Optional[dict[str, Union[type, tuple[type, ...]]]] = None,
    ) -> "Changeset":
        """
        Copy permitted keys from *attributes* into ``changes``.

        When *types* names a key, a non-``None`` value of another type is
        rejected with "is invalid" and kept out of ``changes``.
        """
        types = types or {}
        changes: dict[str, Any] = {}
        errors: dict[str, list[str]] = {}
        for key in permitted:
            if key not in attributes:
                continue
            value = attributes[key]
            expected = types.get(key)
            if expected is not None and value is not None and not isinstance(value, expected):
                errors.setdefault(key, []).append("is invalid")
                continue
            if isinstance(value, str):
                value = value.strip()
            # Unchanged values on an existing entity are not changes.
            if data is not None and getattr(data, key, None) == value:
                continue
            changes[key] = value
        return cls(data=data, changes=changes, errors=errors, action=action)

    def put_change(self, key: str, value: Any) -> "Changeset":
        self.changes[key] = value
        return self

    def add_error(self, key: str, message: str) -> "Changeset":
        self.errors.setdefault(key, []).append(message)
        return self

    # -- reading ---------------------------------------------------------------

    def get_field(self, key: str, default: Any = None) -> Any:
        """Value after the change is applied: the change, else the entity's."""
        if key in self.changes:
            return self.changes[key]
        if self.data is not None:
            return getattr(self.data, key, default)
        return default

    # -- validations -----------------------------------------------------------

    def validate_required(self, keys: Iterable[str]) -> "Changeset":
        for key in keys:
            if key in self.errors:
                continue
            value = self.get_field(key)
            if value is None or (isinstance(value, str) and not value):
                self.add_error(key, "can't be blank")
        return self

    def validate_length(
        self, key: str, min: Optional[int] = None, max: Optional[int] = None
    ) -> "Changeset":
        value = self.changes.get(key)
        if not isinstance(value, str):
            return self
        if min is not None and len(value) < min:
            self.add_error(key, f"should be at least {min} character(s)")
        if max is not None and len(value) > max:
            self.add_error(key, f"should be at most {max} character(s)")
        return self

    def validate_inclusion(self, key: str, values: Iterable[Any]) -> "Changeset":
        if key in self.changes and self.changes[key] not in list(values):
            self.add_error(key, "is invalid")
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "changes": dict(self.changes), "errors": dict(self.errors)}
