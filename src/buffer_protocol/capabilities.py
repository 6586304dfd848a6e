"""
Capability markers for the buffer protocol.

``Buffer`` and ``MutableBuffer`` are structural ABCs: a class satisfies
them by defining the protocol methods, without inheriting or registering.
``register()`` stays available for types whose methods are not visible
from Python, and is used here for the builtin buffer types on
interpreters that predate Python-level buffer methods.

The ``Supports*`` protocols are the static-typing counterparts.
"""

from __future__ import annotations

import array
import mmap
from abc import ABCMeta, abstractmethod
from typing import Any, Protocol, runtime_checkable

from buffer_protocol._features import HAS_NATIVE_BUFFER_PROTOCOL


def _check_methods(cls: type, *methods: str) -> Any:
    """Return True if every method is defined somewhere in the MRO.

    A method explicitly set to None opts the class out.
    """
    mro = cls.__mro__
    for method in methods:
        for base in mro:
            if method in base.__dict__:
                if base.__dict__[method] is None:
                    return NotImplemented
                break
        else:
            return NotImplemented
    return True


class Buffer(metaclass=ABCMeta):
    """Readable-buffer capability: the type can grant views."""

    __slots__ = ()

    @abstractmethod
    def __buffer__(self, flags: int, /) -> memoryview:
        raise NotImplementedError

    @classmethod
    def __subclasshook__(cls, C: type) -> Any:
        if cls is Buffer:
            return _check_methods(C, "__buffer__")
        return NotImplemented


class MutableBuffer(Buffer):
    """Mutable-buffer capability: the type grants views and takes them back."""

    __slots__ = ()

    @abstractmethod
    def __release_buffer__(self, view: memoryview, /) -> None:
        raise NotImplementedError

    @classmethod
    def __subclasshook__(cls, C: type) -> Any:
        if cls is MutableBuffer:
            return _check_methods(C, "__buffer__", "__release_buffer__")
        return NotImplemented


@runtime_checkable
class SupportsBuffer(Protocol):
    """Static-typing counterpart of :class:`Buffer`."""

    def __buffer__(self, flags: int, /) -> memoryview: ...


@runtime_checkable
class SupportsReleaseBuffer(SupportsBuffer, Protocol):
    """Static-typing counterpart of :class:`MutableBuffer`."""

    def __release_buffer__(self, view: memoryview, /) -> None: ...


def is_buffer(obj: object) -> bool:
    """Check whether *obj* can grant views."""
    return isinstance(obj, Buffer)


def is_mutable_buffer(obj: object) -> bool:
    """Check whether *obj* grants views and accepts releases."""
    return isinstance(obj, MutableBuffer)


if not HAS_NATIVE_BUFFER_PROTOCOL:
    Buffer.register(bytes)
    for _native in (bytearray, memoryview, array.array, mmap.mmap):
        MutableBuffer.register(_native)
    del _native
