"""Driver registry - maps connection URLs to database vendors.

URL forms recognised for a vendor id (e.g. ``postgresql``)::

    jdbc:postgresql://localhost/db     (JDBC, also what JayDeBeApi reports)
    postgresql://localhost/db          (RFC-1738 style)
    postgresql+psycopg://localhost/db  (with a driver suffix)
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from ref_guard.core.enums import Vendor
from ref_guard.core.exceptions import (
    DriverNotFoundError,
    ExecutionFailure,
    UnsupportedEngineError,
    VendorError,
)
from ref_guard.core.manager import ForeignKeyManager

logger = logging.getLogger(__name__)

_JDBC_URL_LOOKUP = "DatabaseMetaData.getURL()"


@dataclass(frozen=True)
class VendorIdentity:
    """One supported engine.

    Attributes:
        vendor: Vendor tag.
        url_ids: Ids matched against connection URLs, canonical id first.
        driver_modules: DB-API modules able to reach the engine, in order of
            preference.
        strategy_path: ``module:Class`` of the vendor strategy, imported on
            first use.
    """

    vendor: Vendor
    url_ids: tuple[str, ...]
    driver_modules: tuple[str, ...]
    strategy_path: str

    @property
    def id(self) -> str:
        return self.vendor.value

    def match(self, url: str) -> bool:
        """Check if ``url`` designates this vendor."""
        lowered = url.lower()
        for url_id in self.url_ids:
            if lowered.startswith(f"jdbc:{url_id}:"):
                return True
            if lowered.startswith(f"{url_id}:") or lowered.startswith(f"{url_id}+"):
                return True
        return False

    def match_module(self, module_name: str) -> bool:
        """Check if a connection class defined in ``module_name`` belongs to one of our drivers."""
        return any(
            module_name == driver or module_name.startswith(f"{driver}.")
            for driver in self.driver_modules
        )

    def load_driver(self) -> ModuleType:
        """Import the first available DB-API driver module.

        Raises:
            DriverNotFoundError: If none of the driver modules can be imported.
        """
        for module_name in self.driver_modules:
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                logger.debug("Driver %s is not available", module_name)
                continue
            logger.info("Loaded driver: %s", module_name)
            return module
        raise DriverNotFoundError(self.id, self.driver_modules)

    def create_strategy(self) -> Any:
        """Instantiate the vendor strategy."""
        module_path, _, cls_name = self.strategy_path.partition(":")
        try:
            module = importlib.import_module(module_path)
            return getattr(module, cls_name)()
        except (ImportError, AttributeError) as e:
            raise VendorError(f"Failed to load strategy for '{self.id}': {e}") from e

    def create_manager(self) -> ForeignKeyManager[Any]:
        """Create a fresh foreign key manager for this vendor."""
        return ForeignKeyManager(self.create_strategy())

    def __str__(self) -> str:
        return self.id


def connection_url(connection: Any) -> str | None:
    """Best-effort URL of a live DB-API connection.

    JayDeBeApi connections expose the JDBC metadata; wrappers may carry a
    ``url`` attribute. Plain driver connections yield ``None``.

    Raises:
        ExecutionFailure: If the JDBC metadata lookup fails.
    """
    jconn = getattr(connection, "jconn", None)
    if jconn is not None:
        try:
            return str(jconn.getMetaData().getURL())
        except Exception as e:
            raise ExecutionFailure([_JDBC_URL_LOOKUP], e) from e
    url = getattr(connection, "url", None)
    if isinstance(url, str):
        return url
    return None


class DriverRegistry:
    """Ordered, read-only table of vendor identities.

    Lookups return the first identity that matches, so order matters when
    two vendors could claim the same connection.
    """

    def __init__(self, identities: Iterable[VendorIdentity]) -> None:
        self._identities = tuple(identities)

    def find_by_url(self, url: str) -> VendorIdentity | None:
        """Return the first identity matching ``url``, or None."""
        for identity in self._identities:
            if identity.match(url):
                return identity
        return None

    def find_by_connection(self, connection: Any) -> VendorIdentity | None:
        """Resolve the vendor of a live connection.

        The connection URL wins when there is one; otherwise the module of
        the connection class is matched against the driver modules.
        """
        url = connection_url(connection)
        if url is not None:
            return self.find_by_url(url)
        module_name = type(connection).__module__
        for identity in self._identities:
            if identity.match_module(module_name):
                return identity
        return None

    def get(self, vendor: Vendor | str) -> VendorIdentity:
        """Look up an identity by vendor tag or id.

        Raises:
            UnsupportedEngineError: If the vendor is not registered.
        """
        vendor_id = vendor.value if isinstance(vendor, Vendor) else vendor
        for identity in self._identities:
            if identity.id == vendor_id:
                return identity
        raise UnsupportedEngineError(vendor_id)

    def load_driver(self, url: str) -> ModuleType:
        """Load the DB-API driver for a connection URL.

        Raises:
            UnsupportedEngineError: If no vendor matches ``url``.
            DriverNotFoundError: If the vendor's driver is not installed.
        """
        identity = self.find_by_url(url)
        if identity is None:
            raise UnsupportedEngineError(url)
        return identity.load_driver()

    @property
    def vendors(self) -> list[Vendor]:
        """Registered vendors, in lookup order."""
        return [identity.vendor for identity in self._identities]

    def __iter__(self) -> Iterator[VendorIdentity]:
        return iter(self._identities)

    def __len__(self) -> int:
        return len(self._identities)


DRIVERS = DriverRegistry(
    [
        VendorIdentity(
            Vendor.MYSQL,
            ("mysql",),
            ("mysql.connector", "pymysql", "MySQLdb"),
            "ref_guard.strategies.mysql:MysqlStrategy",
        ),
        VendorIdentity(
            Vendor.POSTGRESQL,
            ("postgresql", "postgres"),
            ("psycopg", "psycopg2"),
            "ref_guard.strategies.postgresql:PostgresqlStrategy",
        ),
        VendorIdentity(
            Vendor.ORACLE,
            ("oracle",),
            ("oracledb", "cx_Oracle"),
            "ref_guard.strategies.oracle:OracleStrategy",
        ),
        VendorIdentity(
            Vendor.MSSQL,
            ("sqlserver", "mssql"),
            ("pymssql",),
            "ref_guard.strategies.mssql:MssqlStrategy",
        ),
        VendorIdentity(
            Vendor.MARIADB,
            ("mariadb",),
            ("mariadb",),
            "ref_guard.strategies.mariadb:MariadbStrategy",
        ),
        VendorIdentity(
            Vendor.HSQLDB,
            ("hsqldb",),
            ("jaydebeapi",),
            "ref_guard.strategies.hsqldb:HsqldbStrategy",
        ),
        VendorIdentity(
            Vendor.H2,
            ("h2",),
            ("jaydebeapi",),
            "ref_guard.strategies.h2:H2Strategy",
        ),
        VendorIdentity(
            Vendor.SQLITE,
            ("sqlite",),
            ("sqlite3",),
            "ref_guard.strategies.sqlite:SqliteStrategy",
        ),
    ]
)
