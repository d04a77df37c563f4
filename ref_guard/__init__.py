"""RefGuard - suspend and restore foreign key constraints around fixture loading."""

from __future__ import annotations

from ref_guard.core.autodetect import AutoDetectForeignKeyManager
from ref_guard.core.config import ForeignKeyConfig, create_manager, create_managers
from ref_guard.core.enums import Vendor
from ref_guard.core.exceptions import (
    ConfigurationError,
    DriverNotFoundError,
    ExecutionError,
    ExecutionFailure,
    IllegalStateError,
    RefGuardError,
    UnknownManagerError,
    UnsupportedEngineError,
    VendorError,
)
from ref_guard.core.execution import batch_execute, query
from ref_guard.core.manager import Disabled, Enabled, ForeignKeyManager
from ref_guard.core.operation import CompositeOperation, build, run, suspended
from ref_guard.core.registry import DRIVERS, DriverRegistry, VendorIdentity
from ref_guard.strategies.protocol import VendorStrategy

__all__ = [
    # Managers
    "ForeignKeyManager",
    "AutoDetectForeignKeyManager",
    "Enabled",
    "Disabled",
    # Strategies
    "VendorStrategy",
    # Registry
    "Vendor",
    "VendorIdentity",
    "DriverRegistry",
    "DRIVERS",
    # Operations
    "CompositeOperation",
    "build",
    "run",
    "suspended",
    # Execution
    "query",
    "batch_execute",
    # Configuration
    "ForeignKeyConfig",
    "create_manager",
    "create_managers",
    # Exceptions
    "RefGuardError",
    "ExecutionError",
    "ExecutionFailure",
    "IllegalStateError",
    "VendorError",
    "UnsupportedEngineError",
    "DriverNotFoundError",
    "ConfigurationError",
    "UnknownManagerError",
]
