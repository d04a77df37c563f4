"""Snapshot records shared by several strategies.

Snapshots are immutable. Column lists are kept as the delimited string the
catalog query produced so that restoring a constraint re-uses it verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields


def require_text(instance: object) -> None:
    """Raise ValueError if a required ``str`` field of a dataclass is empty."""
    for f in fields(instance):  # type: ignore[arg-type]
        value = getattr(instance, f.name)
        if f.metadata.get("optional"):
            continue
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{f.name} must be defined")


@dataclass(frozen=True)
class ForeignKeyConstraint:
    """Full definition of one foreign key, as read from catalog views."""

    constraint_schema: str
    constraint_name: str
    table_schema: str
    table_name: str
    columns: str
    referenced_table_schema: str
    referenced_table_name: str
    referenced_columns: str
    update_rule: str
    delete_rule: str
    deferrable: str | None = field(default=None, metadata={"optional": True})

    def __post_init__(self) -> None:
        require_text(self)


@dataclass(frozen=True)
class SessionSnapshot:
    """Sentinel standing for every constraint of a session-scoped toggle."""

    vendor: str

    def __post_init__(self) -> None:
        require_text(self)
