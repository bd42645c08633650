"""Tests for port interfaces."""

from collections.abc import Iterable
from typing import Any

import pytest

from chlog.core.fields import Fields
from chlog.core.ports import LoggerPort, LogWriterPort

pytestmark = pytest.mark.tier(1)


class TestLogWriterPort:
    """Tests for LogWriterPort protocol."""

    @pytest.mark.core
    def test_protocol_has_write_and_close(self) -> None:
        assert hasattr(LogWriterPort, "write")
        assert hasattr(LogWriterPort, "close")

    @pytest.mark.core
    def test_class_implementing_protocol_is_recognized(self) -> None:
        """A class with write and close methods should satisfy LogWriterPort."""

        class FakeWriter:
            def write(
                self, level: Any, args: Iterable[Any], fields: Fields | None
            ) -> None:
                pass

            def close(self) -> None:
                pass

        assert isinstance(FakeWriter(), LogWriterPort)

    @pytest.mark.core
    def test_class_without_close_is_not_recognized(self) -> None:
        class WriteOnly:
            def write(
                self, level: Any, args: Iterable[Any], fields: Fields | None
            ) -> None:
                pass

        assert not isinstance(WriteOnly(), LogWriterPort)


class TestLoggerPort:
    """Tests for LoggerPort protocol."""

    @pytest.mark.core
    def test_protocol_has_logging_methods(self) -> None:
        for name in ("log", "with_fields", "with_additional_fields", "logger"):
            assert hasattr(LoggerPort, name)
