"""Foreign key manager - the disable/enable state machine.

A manager wraps one vendor strategy and goes through exactly one cycle at
a time::

    enabled --disable()--> disabled(snapshots) --enable()--> enabled

The snapshots captured by ``disable()`` are owned by the manager until a
successful ``enable()`` consumes them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ref_guard.core.exceptions import ExecutionFailure, IllegalStateError
from ref_guard.core.execution import batch_execute
from ref_guard.strategies.protocol import VendorStrategy

logger = logging.getLogger(__name__)

S = TypeVar("S")


@dataclass(frozen=True)
class Enabled:
    """Constraints are in their original state, nothing is captured."""


@dataclass(frozen=True)
class Disabled(Generic[S]):
    """Constraints were suspended; ``snapshots`` describe how to restore them."""

    snapshots: tuple[S, ...]


_ENABLED = Enabled()


class ForeignKeyManager(Generic[S]):
    """Suspends and restores the foreign keys of one database.

    Args:
        strategy: Vendor strategy used to introspect and render DDL.

    ``disable`` and ``enable`` are serialized per instance. The connection
    passed to each call is used for that call only, never kept or closed.
    """

    def __init__(self, strategy: VendorStrategy[S]) -> None:
        self._strategy = strategy
        self._state: Enabled | Disabled[S] = _ENABLED
        self._lock = threading.Lock()

    @property
    def strategy(self) -> VendorStrategy[S]:
        return self._strategy

    @property
    def state(self) -> Enabled | Disabled[S]:
        return self._state

    @property
    def disabled(self) -> bool:
        return isinstance(self._state, Disabled)

    def disable(self, connection: Any) -> None:
        """Introspect every enabled foreign key, then drop or deactivate them.

        Raises:
            IllegalStateError: If foreign keys are already disabled. No SQL
                is issued in that case.
            ExecutionFailure: If introspection or the batch fails. A failed
                batch leaves the manager disabled, keeping the snapshots.
        """
        with self._lock:
            if isinstance(self._state, Disabled):
                raise IllegalStateError(
                    "disabled", "disable", "foreign keys have been dropped, re-enable them first"
                )

            logger.info("Disabling foreign keys...")
            snapshots = tuple(self._strategy.introspect(connection))
            logger.debug("Foreign keys detected: %s", snapshots)
            self._state = Disabled(snapshots)

            statements = self._render(snapshots, self._strategy.render_disable)
            try:
                batch_execute(connection, statements)
            except ExecutionFailure as e:
                logger.error("Cannot disable foreign key constraints: %s", e)
                raise

    def enable(self, connection: Any) -> None:
        """Restore every foreign key captured by the last ``disable()``.

        Raises:
            IllegalStateError: If foreign keys are not disabled.
            ExecutionFailure: If the batch fails. The manager stays disabled
                so that ``enable()`` may be retried.
        """
        with self._lock:
            state = self._state
            if not isinstance(state, Disabled):
                raise IllegalStateError(
                    "enabled", "enable", "foreign keys have not been disabled, disable them first"
                )

            logger.info("Enabling foreign keys...")
            statements = self._render(state.snapshots, self._strategy.render_enable)
            try:
                batch_execute(connection, statements)
            except ExecutionFailure as e:
                logger.error("Cannot enable foreign key constraints, check the dataset: %s", e)
                raise

            self._state = _ENABLED

    @staticmethod
    def _render(snapshots: tuple[S, ...], render: Callable[[S], list[str]]) -> list[str]:
        statements: list[str] = []
        for snapshot in snapshots:
            logger.debug("Generating queries for foreign key: %s", snapshot)
            statements.extend(render(snapshot))
        return statements

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self._strategy).__name__})"
