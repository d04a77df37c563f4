"""Composite operations - bracket a payload with foreign key suspension.

Given managers ``[A, B]`` and a payload ``P`` the bracket runs::

    disable(A), disable(B), P, enable(A), enable(B)

Managers are enabled in the same order they were disabled, not in reverse.
Any failing step stops the sequence and propagates; a failing payload
leaves the constraints disabled.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Literal, Protocol

logger = logging.getLogger(__name__)


class ForeignKeyToggle(Protocol):
    """Anything with the disable/enable pair of a foreign key manager."""

    def disable(self, connection: Any) -> None: ...

    def enable(self, connection: Any) -> None: ...


class DatabaseOperation(Protocol):
    """A unit of work run against a live connection (e.g. loading a fixture)."""

    def __call__(self, connection: Any) -> None: ...


@dataclass(frozen=True)
class ForeignKeyStep:
    """Disable or enable step of one manager."""

    manager: ForeignKeyToggle
    action: Literal["disable", "enable"]

    def __call__(self, connection: Any) -> None:
        logger.debug("-> %s foreign keys with %r", self.action, self.manager)
        if self.action == "disable":
            self.manager.disable(connection)
        else:
            self.manager.enable(connection)


class CompositeOperation:
    """Ordered sequence of operations executed as one unit."""

    def __init__(self, steps: Sequence[DatabaseOperation]) -> None:
        self._steps = tuple(steps)

    @property
    def steps(self) -> tuple[DatabaseOperation, ...]:
        return self._steps

    def __call__(self, connection: Any) -> None:
        for step in self._steps:
            step(connection)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"CompositeOperation({list(self._steps)!r})"


def build(
    payload: DatabaseOperation,
    managers: Sequence[ForeignKeyToggle] | None = None,
) -> DatabaseOperation:
    """Bracket ``payload`` between the disable and enable steps of ``managers``.

    Returns ``payload`` itself when there is no manager.
    """
    if not managers:
        return payload

    steps: list[DatabaseOperation] = [ForeignKeyStep(m, "disable") for m in managers]
    steps.append(payload)
    steps.extend(ForeignKeyStep(m, "enable") for m in managers)
    logger.debug("Merging database operation %r with foreign key managers %r", payload, managers)
    return CompositeOperation(steps)


def run(
    connection: Any,
    payload: DatabaseOperation,
    managers: Sequence[ForeignKeyToggle] | None = None,
) -> None:
    """Build the bracket for ``payload`` and run it on ``connection``."""
    build(payload, managers)(connection)


@contextmanager
def suspended(connection: Any, managers: Sequence[ForeignKeyToggle]) -> Iterator[Any]:
    """Context manager form of the bracket; the ``with`` body is the payload.

    Constraints are restored only when the body completes. If it raises,
    they stay disabled and the error propagates.
    """
    for manager in managers:
        manager.disable(connection)
    yield connection
    for manager in managers:
        manager.enable(connection)
