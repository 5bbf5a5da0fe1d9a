"""Shared fixtures for Ghostwire tests."""

from __future__ import annotations

import pytest

from ghostwire.runtime import ExecutionResult
from ghostwire.storage import CollectionStore, Database


class FakeExecutor:
    """Records invocations and returns a canned result (or raises)."""

    def __init__(self, result: ExecutionResult | None = None, exc: Exception | None = None):
        self.result = result or ExecutionResult(stdout="")
        self.exc = exc
        self.calls: list[list[str]] = []

    async def execute(self, args: list[str]) -> ExecutionResult:
        self.calls.append(list(args))
        if self.exc is not None:
            raise self.exc
        return self.result


VERBOSE_OUTPUT = (
    "Status: 200 OK\n"
    "Time: 120ms\n"
    "Headers:\n"
    "Content-Type: application/json\n"
    "Body:\n"
    '{"a":1}\n'
)


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "ghostwire.db")
    yield db
    db.close()


@pytest.fixture
def store(database):
    s = CollectionStore(database)
    s.load()
    return s


@pytest.fixture
def fake_executor():
    return FakeExecutor(ExecutionResult(stdout=VERBOSE_OUTPUT))


@pytest.fixture
def executor_factory():
    """Build FakeExecutors with a given result or exception."""
    return FakeExecutor
