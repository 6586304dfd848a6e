"""
Runtime feature detection for the host interpreter.

Checks whether builtin types expose the buffer protocol at Python level,
which decides if capability checks can rely on structure alone.
"""
from __future__ import annotations

import collections.abc


def _check_attribute(obj: object, name: str) -> bool:
    """Check if an attribute is reachable on an object."""
    return getattr(obj, name, None) is not None


# Interpreter feature flags
HAS_NATIVE_BUFFER_PROTOCOL: bool = _check_attribute(
    bytes, "__buffer__"
) and _check_attribute(collections.abc, "Buffer")
