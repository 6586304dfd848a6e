"""
Error hierarchy for buffer-protocol.

Provides structured error types for the request/release exchange.
"""

from buffer_protocol.errors.base import (
    BufferAlreadyHeldError,
    BufferNotHeldError,
    BufferProtocolError,
    ErrorContext,
    InvalidViewError,
    NotABufferError,
    ReleasedViewError,
    UnsupportedFlagsError,
)

__all__ = [
    "BufferAlreadyHeldError",
    "BufferNotHeldError",
    "BufferProtocolError",
    "ErrorContext",
    "InvalidViewError",
    "NotABufferError",
    "ReleasedViewError",
    "UnsupportedFlagsError",
]
