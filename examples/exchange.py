#!/usr/bin/env python3
"""
Buffer exchange example.

This example demonstrates:
- Defining a provider with __buffer__ / __release_buffer__
- Checking capabilities structurally
- Requesting, writing through and releasing views

Usage:
    export BUFFER_PROTOCOL_LOG_LEVEL=DEBUG
    python examples/exchange.py
"""

from buffer_protocol import (
    Buffer,
    BufferAlreadyHeldError,
    BufferFlags,
    BufferProvider,
    MutableBuffer,
    ReadOnlyBufferProvider,
    acquire,
)
from buffer_protocol.telemetry import BufferLogger


class Rot13Buffer:
    """Read-only provider exposing a rot13-encoded copy of its text."""

    def __init__(self, text: str) -> None:
        self._data = text.encode("ascii").translate(
            bytes.maketrans(
                b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz",
                b"NOPQRSTUVWXYZABCDEFGHIJKLMnopqrstuvwxyzabcdefghijklm",
            )
        )

    def __buffer__(self, flags: int) -> memoryview:
        if flags & BufferFlags.WRITABLE:
            raise TypeError("read-only buffer")
        return memoryview(self._data)


def capabilities() -> None:
    """Show structural capability checks."""
    print("Capabilities:")
    for cls in (BufferProvider, ReadOnlyBufferProvider, Rot13Buffer, str):
        print(
            f"  {cls.__name__:<24} readable={issubclass(cls, Buffer)!s:<5} "
            f"mutable={issubclass(cls, MutableBuffer)}"
        )
    print()


def exchange() -> None:
    """Write through a view, then read it back."""
    provider = BufferProvider(b"capybara")

    with acquire(provider, BufferFlags.FULL) as view:
        view[0] = ord("C")
        try:
            with acquire(provider):
                pass
        except BufferAlreadyHeldError as e:
            print(f"Second request refused: {e}")

    with acquire(provider, BufferFlags.FULL_RO) as view:
        print(f"Contents after write: {view.tobytes()!r}")

    with acquire(Rot13Buffer("capybara")) as view:
        print(f"Rot13 view: {view.tobytes()!r}")

    print(f"Stats: {provider.stats}")


if __name__ == "__main__":
    BufferLogger.configure_from_env()
    capabilities()
    exchange()
