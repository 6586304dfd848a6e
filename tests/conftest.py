"""Root pytest fixtures for buffer-protocol tests."""

from __future__ import annotations

import io
import sys
from typing import TYPE_CHECKING

import pytest

from buffer_protocol import BufferProvider, ReadOnlyBufferProvider
from buffer_protocol.telemetry import BufferLogger, LogLevel, clear_log_context

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def provider() -> BufferProvider:
    """Mutable provider initialized with b"capybara"."""
    return BufferProvider(b"capybara")


@pytest.fixture
def readonly_provider() -> ReadOnlyBufferProvider:
    """Read-only provider initialized with b"capybara"."""
    return ReadOnlyBufferProvider(b"capybara")


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    """Route library logs to an in-memory JSON stream at DEBUG level."""
    stream = io.StringIO()
    BufferLogger.configure(level=LogLevel.DEBUG, format="json", stream=stream)
    yield stream
    clear_log_context()
    BufferLogger.configure(level=LogLevel.INFO, format="text", stream=sys.stderr)
