"""Shared test fixtures for all test modules."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from chlog.adapters.storage import clickhouse
from chlog.adapters.storage.in_memory import InMemoryLogWriter
from chlog.logger import Logger


@pytest.fixture
def memory_writer() -> InMemoryLogWriter:
    """Provide an empty in-memory writer tagged with a resource id."""
    return InMemoryLogWriter(resource_id="svc-1")


@pytest.fixture
def root_logger(memory_writer: InMemoryLogWriter) -> Logger:
    """Root logger without fields writing to memory_writer."""
    return Logger(memory_writer)


@pytest.fixture
def fake_client(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the ClickHouse client class with a mock.

    The returned mock stands for the client instance; the keyword
    arguments used to create it are stored in ``fake_client.init_kwargs``.
    """
    client = MagicMock(name="Client()")
    client.init_kwargs = {}

    def _factory(**kwargs: Any) -> MagicMock:
        client.init_kwargs = kwargs
        return client

    monkeypatch.setattr(clickhouse, "Client", _factory)
    return client
