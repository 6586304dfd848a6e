"""
View descriptors and flag validation.

A granted view is always a ``memoryview``; :class:`ViewInfo` captures
its layout so it can be checked against a flag set and logged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from buffer_protocol.errors import ReleasedViewError, UnsupportedFlagsError
from buffer_protocol.flags import BufferFlags, normalize_flags


class ViewInfo(BaseModel):
    """Immutable description of a memoryview's layout."""

    model_config = ConfigDict(frozen=True)

    format: str
    itemsize: int
    ndim: int
    shape: tuple[int, ...]
    strides: tuple[int, ...]
    nbytes: int
    readonly: bool
    c_contiguous: bool
    f_contiguous: bool
    contiguous: bool

    @classmethod
    def from_view(cls, view: memoryview) -> ViewInfo:
        """Describe *view*.

        Raises:
            ReleasedViewError: If the view has already been released
        """
        try:
            return cls(
                format=view.format,
                itemsize=view.itemsize,
                ndim=view.ndim,
                shape=tuple(view.shape or ()),
                strides=tuple(view.strides or ()),
                nbytes=view.nbytes,
                readonly=view.readonly,
                c_contiguous=view.c_contiguous,
                f_contiguous=view.f_contiguous,
                contiguous=view.contiguous,
            )
        except ValueError as e:
            # memoryview raises ValueError for any access after release()
            raise ReleasedViewError() from e

    def unmet(self, flags: int | BufferFlags) -> list[str]:
        """List the requirements in *flags* this view does not satisfy."""
        flags = normalize_flags(flags)
        missing: list[str] = []
        if flags.requires_writable and self.readonly:
            missing.append("writable")
        order = flags.contiguity
        if order == "C" and not self.c_contiguous:
            missing.append("c_contiguous")
        elif order == "F" and not self.f_contiguous:
            missing.append("f_contiguous")
        elif order == "A" and not self.contiguous:
            missing.append("contiguous")
        return missing

    def satisfies(self, flags: int | BufferFlags) -> bool:
        """Check whether this view meets every requirement in *flags*."""
        return not self.unmet(flags)


def validate_view(view: memoryview, flags: int | BufferFlags) -> ViewInfo:
    """Check a granted view against the requested flags.

    Args:
        view: The view to check
        flags: Flags the requester asked for

    Returns:
        Descriptor of the view

    Raises:
        UnsupportedFlagsError: If the view does not satisfy the flags
        ReleasedViewError: If the view has already been released
    """
    info = ViewInfo.from_view(view)
    missing = info.unmet(flags)
    if missing:
        raise UnsupportedFlagsError(
            f"View does not satisfy requested flags: {', '.join(missing)}",
            flags=int(flags),
            unmet=missing,
        )
    return info
