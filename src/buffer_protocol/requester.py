"""
Requester side of the buffer exchange.

These helpers play the part of the native caller: they ask an object for
a view, check it against the declared flags, and hand it back when done.
Python-level ``__buffer__``/``__release_buffer__`` methods are called
directly; builtin types are served by the interpreter via ``memoryview``.
"""

from __future__ import annotations

import types
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from buffer_protocol.errors import (
    InvalidViewError,
    NotABufferError,
    UnsupportedFlagsError,
)
from buffer_protocol.flags import BufferFlags, normalize_flags
from buffer_protocol.telemetry import get_logger
from buffer_protocol.view import validate_view

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger("buffer_protocol.requester")

_NATIVE_METHOD_TYPES = (types.WrapperDescriptorType, types.MethodDescriptorType)


def _python_hook(obj: object, name: str) -> Any:
    """Return the Python-level protocol method defined on type(obj), if any.

    Slot wrappers of builtin types are skipped: the interpreter already
    serves those through ``memoryview``.
    """
    hook = getattr(type(obj), name, None)
    if hook is None or isinstance(hook, _NATIVE_METHOD_TYPES):
        return None
    return hook


def get_buffer(obj: object, flags: int | BufferFlags = BufferFlags.SIMPLE) -> memoryview:
    """Request a view of *obj* satisfying *flags*.

    Args:
        obj: The provider
        flags: Requirements for the view

    Returns:
        The granted view

    Raises:
        NotABufferError: If obj implements no buffer protocol
        InvalidViewError: If obj.__buffer__ returned a non-memoryview
        UnsupportedFlagsError: If the flags cannot be satisfied
        BufferAlreadyHeldError: If the provider has no view to spare
    """
    flags = normalize_flags(flags)
    hook = _python_hook(obj, "__buffer__")
    if hook is not None:
        view = hook(obj, int(flags))
        if not isinstance(view, memoryview):
            raise InvalidViewError(
                f"__buffer__ returned non-memoryview object of type "
                f"{type(view).__name__}",
                returned_type=type(view).__name__,
            )
    else:
        try:
            view = memoryview(obj)  # type: ignore[arg-type]
        except TypeError as e:
            raise NotABufferError(
                f"a bytes-like object is required, not '{type(obj).__name__}'",
                type_name=type(obj).__name__,
            ) from e

    try:
        validate_view(view, flags)
    except UnsupportedFlagsError as e:
        logger.debug(
            "Releasing view that failed validation",
            provider=type(obj).__name__,
            flags=int(flags),
            unmet=e.unmet,
        )
        release_buffer(obj, view)
        raise
    return view


def release_buffer(obj: object, view: memoryview) -> None:
    """Hand *view* back to *obj*.

    Calls ``obj.__release_buffer__`` when the type defines one at Python
    level, then releases the view. Releasing an already released view is
    a no-op for the view itself.
    """
    hook = _python_hook(obj, "__release_buffer__")
    if hook is not None:
        hook(obj, view)
    view.release()


@contextmanager
def acquire(
    obj: object, flags: int | BufferFlags = BufferFlags.SIMPLE
) -> Iterator[memoryview]:
    """Hold a view of *obj* for the duration of a ``with`` block.

    Example:
        >>> with acquire(provider, BufferFlags.WRITABLE) as view:
        ...     view[0] = ord("C")
    """
    view = get_buffer(obj, flags)
    try:
        yield view
    finally:
        release_buffer(obj, view)
