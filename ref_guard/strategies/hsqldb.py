"""HSQLDB strategy - database-wide referential integrity switch."""

from __future__ import annotations

from typing import Any

from ref_guard.strategies.snapshot import SessionSnapshot

_ALL_CONSTRAINTS = SessionSnapshot("hsqldb")


class HsqldbStrategy:
    """Foreign key strategy for HSQLDB.

    Checks are switched off for the whole database, so a single sentinel
    snapshot stands for every constraint.
    """

    def introspect(self, connection: Any) -> list[SessionSnapshot]:
        return [_ALL_CONSTRAINTS]

    def render_disable(self, snapshot: SessionSnapshot) -> list[str]:
        return ["SET DATABASE REFERENTIAL INTEGRITY FALSE"]

    def render_enable(self, snapshot: SessionSnapshot) -> list[str]:
        return ["SET DATABASE REFERENTIAL INTEGRITY TRUE"]
