"""RefGuard exception hierarchy.

Raw driver exceptions are never exposed unwrapped: they are chained as the
cause of an ``ExecutionFailure`` whose message keeps the driver text.
"""

from __future__ import annotations

from collections.abc import Sequence


class RefGuardError(Exception):
    """Base exception for all RefGuard errors."""


# --- Execution ---


class ExecutionError(RefGuardError):
    """Base for SQL execution errors."""


class ExecutionFailure(ExecutionError):
    """Raised when a query or a batch of statements fails against the database."""

    def __init__(self, statements: Sequence[str], cause: BaseException) -> None:
        self.statements = list(statements)
        self.cause = cause
        if len(self.statements) == 1:
            target = f"query: {self.statements[0]}"
        else:
            target = f"queries: {self.statements}"
        super().__init__(f"Cannot execute {target} ({type(cause).__name__}: {cause})")

    @property
    def sql(self) -> str:
        """Offending SQL, statements joined by newlines for batches."""
        return "\n".join(self.statements)


# --- Protocol state ---


class IllegalStateError(RefGuardError):
    """Raised on invalid disable/enable transitions."""

    def __init__(self, current_state: str, attempted_action: str, detail: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} foreign keys in state '{current_state}': {detail}")


# --- Vendor ---


class VendorError(RefGuardError):
    """Base for vendor detection and driver errors."""


class UnsupportedEngineError(VendorError):
    """Raised when no vendor matches a connection URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Database engine cannot be detected from: {url}")


class DriverNotFoundError(VendorError):
    """Raised when none of a vendor's DB-API driver modules can be imported."""

    def __init__(self, vendor: str, modules: Sequence[str]) -> None:
        self.vendor = vendor
        self.modules = list(modules)
        super().__init__(
            f"Cannot load {self.modules[0]} driver for '{vendor}', "
            f"please install one of: {', '.join(self.modules)}"
        )


# --- Configuration ---


class ConfigurationError(RefGuardError):
    """Base for configuration errors."""


class UnknownManagerError(ConfigurationError):
    """Raised when a configured foreign key manager identifier is not registered."""

    def __init__(self, name: str, known: Sequence[str]) -> None:
        self.name = name
        super().__init__(f"Unknown foreign key manager '{name}' (known: {', '.join(known)})")
