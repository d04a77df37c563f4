"""Auto-detecting foreign key manager.

Picks the vendor strategy from the live connection when foreign keys are
disabled, and refuses to enable them against a different engine.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from ref_guard.core.exceptions import IllegalStateError, UnsupportedEngineError
from ref_guard.core.manager import ForeignKeyManager
from ref_guard.core.registry import DRIVERS, DriverRegistry, VendorIdentity, connection_url

logger = logging.getLogger(__name__)


class AutoDetectForeignKeyManager:
    """Foreign key manager delegating to the vendor of the connection.

    Args:
        url: Optional URL used instead of the connection to pick the vendor.
        registry: Vendor table to search, ``DRIVERS`` by default.
    """

    def __init__(self, url: str | None = None, registry: DriverRegistry = DRIVERS) -> None:
        self._url = url
        self._registry = registry
        self._identity: VendorIdentity | None = None
        self._delegate: ForeignKeyManager[Any] | None = None
        self._lock = threading.Lock()

    @property
    def identity(self) -> VendorIdentity | None:
        """Vendor resolved by the pending ``disable()``, if any."""
        return self._identity

    @property
    def disabled(self) -> bool:
        return self._delegate is not None

    def disable(self, connection: Any) -> None:
        """Detect the vendor, then disable foreign keys with its manager.

        Raises:
            IllegalStateError: If foreign keys are already disabled.
            UnsupportedEngineError: If no vendor matches the connection.
            ExecutionFailure: If introspection or the batch fails. The vendor
                is kept only when its manager ended up disabled, so that
                ``enable()`` may be retried.
        """
        with self._lock:
            if self._identity is not None or self._delegate is not None:
                raise IllegalStateError(
                    "disabled", "disable", "foreign keys have been dropped, re-enable them first"
                )

            identity = self._resolve(connection)
            if identity is None:
                raise UnsupportedEngineError(self._describe(connection))

            logger.info("Detected database vendor: %s", identity)
            delegate = identity.create_manager()
            try:
                delegate.disable(connection)
            finally:
                if delegate.disabled:
                    self._identity = identity
                    self._delegate = delegate

    def enable(self, connection: Any) -> None:
        """Enable foreign keys with the manager chosen by ``disable()``.

        Raises:
            IllegalStateError: If foreign keys are not disabled, or if the
                connection now points to a different vendor.
        """
        with self._lock:
            if self._identity is None or self._delegate is None:
                raise IllegalStateError(
                    "enabled", "enable", "foreign keys have not been disabled, disable them first"
                )

            current = self._resolve(connection)
            if current is not self._identity:
                raise IllegalStateError(
                    "disabled",
                    "enable",
                    f"database vendor has changed (previous: {self._identity}, now: {current})",
                )

            self._delegate.enable(connection)
            self._identity = None
            self._delegate = None

    def _resolve(self, connection: Any) -> VendorIdentity | None:
        if self._url is not None:
            return self._registry.find_by_url(self._url)
        return self._registry.find_by_connection(connection)

    def _describe(self, connection: Any) -> str:
        if self._url is not None:
            return self._url
        url = connection_url(connection)
        if url is not None:
            return url
        return f"<{type(connection).__module__}.{type(connection).__qualname__}>"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(identity={self._identity})"
