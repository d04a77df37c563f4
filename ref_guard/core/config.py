"""Foreign key suspension configuration.

ForeignKeyConfig is a Pydantic model listing the managers to build, by
identifier. Identifiers resolve through an explicit factory table:

    "auto"                -> AutoDetectForeignKeyManager (honours ``url``)
    "information_schema"  -> generic INFORMATION_SCHEMA manager
    "<vendor id>"         -> that vendor's manager ("mysql", "postgresql", ...)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, field_validator

from ref_guard.core.autodetect import AutoDetectForeignKeyManager
from ref_guard.core.exceptions import UnknownManagerError
from ref_guard.core.manager import ForeignKeyManager
from ref_guard.core.registry import DRIVERS


class ForeignKeyConfig(BaseModel):
    """Configuration for foreign key suspension. Empty ``managers`` disables it."""

    managers: list[str] = []
    url: str | None = None

    @field_validator("managers")
    @classmethod
    def _check_managers(cls, value: list[str]) -> list[str]:
        names = [name.strip().lower() for name in value]
        for name in names:
            if name not in MANAGER_FACTORIES:
                raise ValueError(str(UnknownManagerError(name, sorted(MANAGER_FACTORIES))))
        return names


def _information_schema(config: ForeignKeyConfig) -> ForeignKeyManager[Any]:
    from ref_guard.strategies.information_schema import InformationSchemaStrategy

    return ForeignKeyManager(InformationSchemaStrategy())


def _vendor_factory(vendor_id: str) -> Callable[[ForeignKeyConfig], Any]:
    def factory(config: ForeignKeyConfig) -> ForeignKeyManager[Any]:
        return DRIVERS.get(vendor_id).create_manager()

    return factory


MANAGER_FACTORIES: dict[str, Callable[[ForeignKeyConfig], Any]] = {
    "auto": lambda config: AutoDetectForeignKeyManager(url=config.url),
    "information_schema": _information_schema,
    **{identity.id: _vendor_factory(identity.id) for identity in DRIVERS},
}


def create_manager(name: str, config: ForeignKeyConfig | None = None) -> Any:
    """Build a fresh manager from its identifier.

    Raises:
        UnknownManagerError: If ``name`` is not registered.
    """
    key = name.strip().lower()
    try:
        factory = MANAGER_FACTORIES[key]
    except KeyError:
        raise UnknownManagerError(name, sorted(MANAGER_FACTORIES)) from None
    return factory(config or ForeignKeyConfig())


def create_managers(config: ForeignKeyConfig) -> list[Any]:
    """Build one fresh manager per configured identifier, in order."""
    return [create_manager(name, config) for name in config.managers]
