"""Unit tests for ForeignKeyConfig and manager factories."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ref_guard.core.autodetect import AutoDetectForeignKeyManager
from ref_guard.core.config import ForeignKeyConfig, create_manager, create_managers
from ref_guard.core.exceptions import UnknownManagerError
from ref_guard.core.manager import ForeignKeyManager
from ref_guard.strategies.information_schema import InformationSchemaStrategy
from ref_guard.strategies.mysql import MysqlStrategy
from ref_guard.strategies.oracle import OracleStrategy


class TestForeignKeyConfig:
    def test_defaults_to_no_manager(self) -> None:
        config = ForeignKeyConfig()
        assert config.managers == []
        assert config.url is None
        assert create_managers(config) == []

    def test_creates_managers_in_order(self) -> None:
        config = ForeignKeyConfig(managers=["mysql", "Oracle", "information_schema"])
        managers = create_managers(config)

        assert [type(m.strategy) for m in managers] == [
            MysqlStrategy,
            OracleStrategy,
            InformationSchemaStrategy,
        ]

    def test_unknown_manager_fails_validation(self) -> None:
        with pytest.raises(ValidationError, match="derby"):
            ForeignKeyConfig(managers=["derby"])

    def test_auto_manager_receives_url(self, make_connection) -> None:
        config = ForeignKeyConfig(managers=["auto"], url="jdbc:h2:mem:test")
        (manager,) = create_managers(config)
        assert isinstance(manager, AutoDetectForeignKeyManager)

        conn = make_connection(url="jdbc:mysql://localhost/db")
        manager.disable(conn)
        assert conn.executed == ["SET REFERENTIAL_INTEGRITY FALSE"]

    def test_instances_are_not_shared(self) -> None:
        config = ForeignKeyConfig(managers=["postgresql"])
        assert create_managers(config)[0] is not create_managers(config)[0]

    def test_create_manager_by_name(self) -> None:
        assert isinstance(create_manager("sqlite"), ForeignKeyManager)
        with pytest.raises(UnknownManagerError, match="derby"):
            create_manager("derby")
