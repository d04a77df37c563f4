"""Unit tests for ForeignKeyManager."""

from __future__ import annotations

import threading

import pytest

from ref_guard.core.exceptions import ExecutionFailure, IllegalStateError
from ref_guard.core.manager import Disabled, Enabled, ForeignKeyManager


class TestForeignKeyManager:
    def test_initial_state_is_enabled(self, make_strategy) -> None:
        manager = ForeignKeyManager(make_strategy())
        assert isinstance(manager.state, Enabled)
        assert manager.disabled is False

    def test_disable_drops_in_introspection_order(self, make_strategy, connection) -> None:
        manager = ForeignKeyManager(make_strategy(["fk_b", "fk_a", "fk_c"]))
        manager.disable(connection)

        assert connection.executed == ["DROP fk_b", "DROP fk_a", "DROP fk_c"]
        assert connection.commits == 1
        assert manager.state == Disabled(("fk_b", "fk_a", "fk_c"))

    def test_enable_restores_captured_snapshots(self, make_strategy, make_connection) -> None:
        strategy = make_strategy()
        manager = ForeignKeyManager(strategy)
        manager.disable(make_connection())

        # The live catalog changed in between: restoring uses the capture.
        strategy.snapshots = []
        conn = make_connection()
        manager.enable(conn)

        assert conn.executed == ["ADD fk_a", "ADD fk_b"]
        assert isinstance(manager.state, Enabled)
        assert strategy.introspections == 1

    def test_double_disable_raises_without_sql(self, make_strategy, make_connection) -> None:
        strategy = make_strategy()
        manager = ForeignKeyManager(strategy)
        manager.disable(make_connection())

        conn = make_connection()
        with pytest.raises(IllegalStateError, match="disable"):
            manager.disable(conn)
        assert conn.executed == []
        assert strategy.introspections == 1

    def test_enable_before_disable_raises(self, make_strategy, connection) -> None:
        manager = ForeignKeyManager(make_strategy())
        with pytest.raises(IllegalStateError) as exc_info:
            manager.enable(connection)
        assert exc_info.value.current_state == "enabled"
        assert connection.executed == []

    def test_full_cycle_can_be_repeated(self, make_strategy, make_connection) -> None:
        manager = ForeignKeyManager(make_strategy())
        for _ in range(2):
            manager.disable(make_connection())
            manager.enable(make_connection())
        assert isinstance(manager.state, Enabled)

    def test_empty_capture_is_still_disabled(self, make_strategy, connection) -> None:
        manager = ForeignKeyManager(make_strategy([]))
        manager.disable(connection)
        assert manager.disabled is True
        assert connection.executed == []

        manager.enable(connection)
        assert manager.disabled is False

    def test_failed_disable_keeps_snapshots(self, make_strategy, make_connection) -> None:
        manager = ForeignKeyManager(make_strategy())
        conn = make_connection(failures={"DROP fk_b": RuntimeError("permission denied")})

        with pytest.raises(ExecutionFailure, match="permission denied"):
            manager.disable(conn)

        assert manager.state == Disabled(("fk_a", "fk_b"))
        enable_conn = make_connection()
        manager.enable(enable_conn)
        assert enable_conn.executed == ["ADD fk_a", "ADD fk_b"]

    def test_failed_introspection_stays_enabled(self, make_strategy, make_connection) -> None:
        strategy = make_strategy()

        def broken(connection) -> list[str]:
            raise ExecutionFailure(["SELECT"], RuntimeError("catalog unavailable"))

        strategy.introspect = broken
        manager = ForeignKeyManager(strategy)
        with pytest.raises(ExecutionFailure):
            manager.disable(make_connection())
        assert isinstance(manager.state, Enabled)

    def test_failed_enable_can_be_retried(self, make_strategy, make_connection) -> None:
        manager = ForeignKeyManager(make_strategy())
        manager.disable(make_connection())

        with pytest.raises(ExecutionFailure):
            manager.enable(make_connection(failures={"ADD fk_a": RuntimeError("orphan rows")}))
        assert manager.disabled is True

        retry = make_connection()
        manager.enable(retry)
        assert retry.executed == ["ADD fk_a", "ADD fk_b"]
        assert manager.disabled is False

    def test_concurrent_disable_only_one_succeeds(self, make_strategy, make_connection) -> None:
        manager = ForeignKeyManager(make_strategy())
        errors: list[Exception] = []
        barrier = threading.Barrier(4)

        def worker() -> None:
            barrier.wait()
            try:
                manager.disable(make_connection())
            except IllegalStateError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(errors) == 3
        assert manager.disabled is True
