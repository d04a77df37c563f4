"""H2 strategy - database-wide referential integrity switch."""

from __future__ import annotations

from typing import Any

from ref_guard.strategies.snapshot import SessionSnapshot

_ALL_CONSTRAINTS = SessionSnapshot("h2")


class H2Strategy:
    """Foreign key strategy for H2, one sentinel snapshot for every constraint."""

    def introspect(self, connection: Any) -> list[SessionSnapshot]:
        return [_ALL_CONSTRAINTS]

    def render_disable(self, snapshot: SessionSnapshot) -> list[str]:
        return ["SET REFERENTIAL_INTEGRITY FALSE"]

    def render_enable(self, snapshot: SessionSnapshot) -> list[str]:
        return ["SET REFERENTIAL_INTEGRITY TRUE"]
