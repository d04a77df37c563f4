"""Vendor strategy protocol.

Every strategy module implements this protocol: introspect the enabled
foreign keys of the connected database, then render the statements that
suspend and restore one captured snapshot.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

S = TypeVar("S")


@runtime_checkable
class VendorStrategy(Protocol[S]):
    """Engine-specific foreign key introspection and DDL rendering."""

    def introspect(self, connection: Any) -> list[S]:
        """Return a snapshot of every currently enabled foreign key, in a stable order."""
        ...

    def render_disable(self, snapshot: S) -> list[str]:
        """Statements dropping or deactivating exactly this constraint."""
        ...

    def render_enable(self, snapshot: S) -> list[str]:
        """Statements restoring exactly this constraint."""
        ...
