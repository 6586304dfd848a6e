"""
Reference buffer providers.

``BufferProvider`` follows the reference contract: it grants a view on
request, tracks it until released, and rejects a further request while
the limit of outstanding views is reached. ``ReadOnlyBufferProvider``
only ever grants read-only views and therefore implements no release
handling at all.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass

from buffer_protocol.errors import (
    BufferAlreadyHeldError,
    BufferNotHeldError,
    UnsupportedFlagsError,
)
from buffer_protocol.flags import BufferFlags, normalize_flags
from buffer_protocol.telemetry import get_logger

logger = get_logger("buffer_protocol.provider")

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class ProviderConfig:
    """Configuration for a release-tracking provider.

    Attributes:
        max_views: Maximum number of views outstanding at once
        strict_release: Raise on releasing a view this provider did not grant
    """

    max_views: int = 1
    strict_release: bool = True

    def __post_init__(self) -> None:
        if self.max_views < 1:
            raise ValueError(f"max_views must be at least 1, got {self.max_views}")

    @classmethod
    def from_env(cls) -> ProviderConfig:
        """Create configuration from environment variables."""
        max_views = int(os.getenv("BUFFER_PROTOCOL_MAX_VIEWS", "1"))
        strict_str = os.getenv("BUFFER_PROTOCOL_STRICT_RELEASE")
        strict_release = (
            strict_str.strip().lower() in _TRUTHY if strict_str is not None else True
        )
        return cls(max_views=max_views, strict_release=strict_release)


@dataclass
class ProviderStats:
    """Counters for a provider's view exchanges."""

    granted: int = 0
    released: int = 0
    rejected: int = 0
    peak_outstanding: int = 0


class BufferProvider:
    """Mutable provider over a private ``bytearray``.

    Writable requests receive a writable view, read-only requests receive
    a read-only view of the same memory.

    Example:
        >>> provider = BufferProvider(b"capybara")
        >>> view = provider.__buffer__(BufferFlags.FULL)
        >>> view[0] = ord("C")
        >>> provider.__release_buffer__(view)
        >>> provider.tobytes()
        b'Capybara'
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview = b"",
        *,
        config: ProviderConfig | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            data: Initial contents, copied into the provider
            config: Provider configuration
        """
        self._data = bytearray(data)
        self._config = config or ProviderConfig()
        self._views: list[memoryview] = []
        self._lock = threading.Lock()
        self._stats = ProviderStats()

    @property
    def config(self) -> ProviderConfig:
        """Get provider configuration."""
        return self._config

    @property
    def stats(self) -> ProviderStats:
        """Get exchange counters."""
        return self._stats

    @property
    def outstanding(self) -> int:
        """Number of views granted and not yet released."""
        return len(self._views)

    @property
    def held(self) -> bool:
        """Whether any granted view is still outstanding."""
        return bool(self._views)

    def __len__(self) -> int:
        return len(self._data)

    def tobytes(self) -> bytes:
        """Copy of the current contents."""
        return bytes(self._data)

    def __buffer__(self, flags: int, /) -> memoryview:
        flags = normalize_flags(flags)
        name = type(self).__name__
        with self._lock:
            if len(self._views) >= self._config.max_views:
                self._stats.rejected += 1
                logger.info(
                    "View request rejected",
                    provider=name,
                    flags=int(flags),
                    outstanding=len(self._views),
                )
                raise BufferAlreadyHeldError(
                    outstanding=len(self._views),
                    limit=self._config.max_views,
                )

            view = memoryview(self._data)
            if not flags.requires_writable:
                view = view.toreadonly()

            self._views.append(view)
            self._stats.granted += 1
            self._stats.peak_outstanding = max(
                self._stats.peak_outstanding, len(self._views)
            )

        logger.debug(
            "View granted",
            provider=name,
            flags=int(flags),
            readonly=view.readonly,
            nbytes=view.nbytes,
        )
        return view

    def __release_buffer__(self, view: memoryview, /) -> None:
        name = type(self).__name__
        with self._lock:
            for i, held in enumerate(self._views):
                if held is view:
                    break
            else:
                if self._config.strict_release:
                    raise BufferNotHeldError()
                logger.warning("Ignoring release of unknown view", provider=name)
                return
            # Raises BufferError while sub-views are exported; stay held then
            view.release()
            del self._views[i]
            self._stats.released += 1

        logger.debug("View released", provider=name, outstanding=self.outstanding)


class ReadOnlyBufferProvider:
    """Provider that only grants read-only views.

    Omitting ``__release_buffer__`` marks the type as readable but not
    mutable for the capability checks.
    """

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def tobytes(self) -> bytes:
        """Copy of the contents."""
        return self._data

    def __buffer__(self, flags: int, /) -> memoryview:
        flags = normalize_flags(flags)
        if flags.requires_writable:
            logger.info(
                "Writable view refused",
                provider=type(self).__name__,
                flags=int(flags),
            )
            raise UnsupportedFlagsError(
                "Provider only grants read-only views",
                flags=int(flags),
                unmet=["writable"],
            )
        return memoryview(self._data)
