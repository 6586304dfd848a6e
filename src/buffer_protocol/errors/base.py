"""
Base error classes for buffer-protocol.

Provides a layered error hierarchy:
- BufferProtocolError: Base class for all library errors
- UnsupportedFlagsError: Requested flag set cannot be satisfied
- BufferAlreadyHeldError: A view is requested while the limit is reached
- BufferNotHeldError: A release names a view the provider never granted
- ReleasedViewError: A released view was used
- NotABufferError: Object does not implement the buffer protocol
- InvalidViewError: __buffer__ returned something other than a memoryview

All errors derive from the builtin ``BufferError`` so callers that already
guard native buffer exchanges keep working.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorContext:
    """Structured error context for diagnostics.

    Provides actionable information for debugging and error handling.
    """

    source: str | None = None
    """Error source (e.g., 'provider', 'requester', 'flags')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class BufferProtocolError(BufferError):
    """Base class for all buffer-protocol errors.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def __str__(self) -> str:
        return self._format_message()

    def with_hint(self, hint: str) -> BufferProtocolError:
        """Add a hint to this error."""
        self.context.hint = hint
        return self


class UnsupportedFlagsError(BufferProtocolError):
    """The provider cannot satisfy the requested flag combination.

    Raised when:
    - The flag value carries unknown bits or is negative
    - A writable view is requested from a read-only provider
    - The granted view lacks the requested contiguity
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        flags: int | None = None,
        unmet: list[str] | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="flags")
        if flags is not None:
            ctx.details["flags"] = int(flags)
        if unmet:
            ctx.details["unmet"] = list(unmet)
        super().__init__(message, ctx)
        self.flags = flags
        self.unmet = list(unmet or [])


class BufferAlreadyHeldError(BufferProtocolError):
    """A view was requested before the outstanding one was released."""

    def __init__(
        self,
        message: str = "Buffer already held",
        context: ErrorContext | None = None,
        *,
        outstanding: int = 1,
        limit: int = 1,
    ) -> None:
        ctx = context or ErrorContext(
            source="provider",
            hint="release the outstanding view before requesting a new one",
        )
        ctx.details["outstanding"] = outstanding
        ctx.details["limit"] = limit
        super().__init__(message, ctx)
        self.outstanding = outstanding
        self.limit = limit


class BufferNotHeldError(BufferProtocolError):
    """A release call named a view this provider did not grant."""

    def __init__(
        self,
        message: str = "View was not granted by this provider",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context or ErrorContext(source="provider"))


class ReleasedViewError(BufferProtocolError):
    """A view was used after it had been released."""

    def __init__(
        self,
        message: str = "Operation on a released view",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context or ErrorContext(source="view"))


class NotABufferError(BufferProtocolError, TypeError):
    """The object implements no buffer protocol at all."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        type_name: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="requester")
        if type_name:
            ctx.details["type"] = type_name
        super().__init__(message, ctx)
        self.type_name = type_name


class InvalidViewError(BufferProtocolError, TypeError):
    """``__buffer__`` returned an object that is not a memoryview."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        returned_type: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="requester")
        if returned_type:
            ctx.details["returned_type"] = returned_type
        super().__init__(message, ctx)
        self.returned_type = returned_type
