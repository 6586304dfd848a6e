"""Tests for runtime feature detection."""

import collections.abc
import sys

from buffer_protocol import HAS_NATIVE_BUFFER_PROTOCOL


def test_native_buffer_protocol_detection() -> None:
    """Test detection agrees with the interpreter."""
    expected = hasattr(bytes, "__buffer__") and hasattr(collections.abc, "Buffer")
    assert expected == HAS_NATIVE_BUFFER_PROTOCOL
    if sys.version_info >= (3, 12):
        assert HAS_NATIVE_BUFFER_PROTOCOL
