"""
Request flags for the buffer exchange.

Values match the native memory exchange contract bit for bit, so a flag
value can be handed straight to ``__buffer__`` implementations written
against the interpreter's own constants.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Literal

from buffer_protocol.errors import UnsupportedFlagsError

Contiguity = Literal["C", "F", "A"]


class BufferFlags(IntFlag):
    """Requirements a requester declares when asking for a view."""

    SIMPLE = 0x0
    WRITABLE = 0x1
    FORMAT = 0x4
    ND = 0x8
    STRIDES = 0x10 | ND
    C_CONTIGUOUS = 0x20 | STRIDES
    F_CONTIGUOUS = 0x40 | STRIDES
    ANY_CONTIGUOUS = 0x80 | STRIDES
    INDIRECT = 0x100 | STRIDES
    CONTIG = ND | WRITABLE
    CONTIG_RO = ND
    STRIDED = STRIDES | WRITABLE
    STRIDED_RO = STRIDES
    RECORDS = STRIDES | WRITABLE | FORMAT
    RECORDS_RO = STRIDES | FORMAT
    FULL = INDIRECT | WRITABLE | FORMAT
    FULL_RO = INDIRECT | FORMAT
    READ = 0x100
    WRITE = 0x200

    def _has(self, mask: BufferFlags) -> bool:
        return (self & mask) == mask

    @property
    def requires_writable(self) -> bool:
        """Whether the requester intends to write through the view."""
        return bool(self & (BufferFlags.WRITABLE | BufferFlags.WRITE))

    @property
    def requires_format(self) -> bool:
        """Whether the requester reads the element format."""
        return self._has(BufferFlags.FORMAT)

    @property
    def requires_strides(self) -> bool:
        """Whether the requester can handle explicit strides."""
        return self._has(BufferFlags.STRIDES)

    @property
    def contiguity(self) -> Contiguity | None:
        """Memory order demanded by the requester, if any.

        Requesters that cannot handle strides implicitly need C order,
        which is reported as ``"C"`` as well.
        """
        if self._has(BufferFlags.C_CONTIGUOUS):
            return "C"
        if self._has(BufferFlags.F_CONTIGUOUS):
            return "F"
        if self._has(BufferFlags.ANY_CONTIGUOUS):
            return "A"
        if not self.requires_strides:
            return "C"
        return None


_KNOWN_BITS = 0
for _member in BufferFlags.__members__.values():
    _KNOWN_BITS |= _member.value
del _member


def normalize_flags(flags: int | BufferFlags) -> BufferFlags:
    """Convert a raw flag value to :class:`BufferFlags`.

    Args:
        flags: Raw integer or BufferFlags value

    Returns:
        The flags as a BufferFlags value

    Raises:
        UnsupportedFlagsError: If the value is negative or carries unknown bits
    """
    if isinstance(flags, bool) or not isinstance(flags, int):
        raise UnsupportedFlagsError(
            f"Flags must be an int, got {type(flags).__name__}"
        )
    if flags < 0:
        raise UnsupportedFlagsError(f"Negative flags value: {flags}", flags=flags)
    unknown = flags & ~_KNOWN_BITS
    if unknown:
        raise UnsupportedFlagsError(
            f"Unknown flag bits: {unknown:#x}",
            flags=flags,
        )
    return BufferFlags(flags)
