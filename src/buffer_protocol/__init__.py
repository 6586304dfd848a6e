"""
buffer-protocol: the two-method buffer exposure protocol for Python types.

Lets user-defined types share memory with requesters through
``__buffer__`` / ``__release_buffer__``, and lets code ask whether a type
can do so through the structural ``Buffer`` / ``MutableBuffer`` markers.
"""
from __future__ import annotations

from buffer_protocol._features import HAS_NATIVE_BUFFER_PROTOCOL
from buffer_protocol.capabilities import (
    Buffer,
    MutableBuffer,
    SupportsBuffer,
    SupportsReleaseBuffer,
    is_buffer,
    is_mutable_buffer,
)
from buffer_protocol.errors import (
    BufferAlreadyHeldError,
    BufferNotHeldError,
    BufferProtocolError,
    InvalidViewError,
    NotABufferError,
    ReleasedViewError,
    UnsupportedFlagsError,
)
from buffer_protocol.flags import BufferFlags, normalize_flags
from buffer_protocol.provider import (
    BufferProvider,
    ProviderConfig,
    ProviderStats,
    ReadOnlyBufferProvider,
)
from buffer_protocol.requester import acquire, get_buffer, release_buffer
from buffer_protocol.view import ViewInfo, validate_view

__version__ = "0.1.0"

__all__ = [
    # Capabilities
    "Buffer",
    "MutableBuffer",
    "SupportsBuffer",
    "SupportsReleaseBuffer",
    "is_buffer",
    "is_mutable_buffer",
    # Errors
    "BufferAlreadyHeldError",
    "BufferNotHeldError",
    "BufferProtocolError",
    "InvalidViewError",
    "NotABufferError",
    "ReleasedViewError",
    "UnsupportedFlagsError",
    # Feature flags
    "HAS_NATIVE_BUFFER_PROTOCOL",
    # Flags
    "BufferFlags",
    "normalize_flags",
    # Providers
    "BufferProvider",
    "ProviderConfig",
    "ProviderStats",
    "ReadOnlyBufferProvider",
    # Requester
    "acquire",
    "get_buffer",
    "release_buffer",
    # Views
    "ViewInfo",
    "validate_view",
    # Version
    "__version__",
]
