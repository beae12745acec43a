"""Exceptions raised while decoding MPLS playlists."""

from __future__ import annotations


class MplsError(ValueError):
    """Base class for every MPLS decoding failure.

    Carries the offending file *path* (empty for anonymous buffers) and a
    human-readable *detail*.
    """

    def __init__(self, detail: str, path: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.path = path or ""

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.detail}"
        return self.detail


class FileOpenError(MplsError):
    """The playlist file could not be opened or read."""


class TooSmallError(MplsError):
    """The buffer is shorter than the fixed MPLS header."""


class InvalidMagicError(MplsError):
    """The 8-byte type indicator is not a known MPLS version."""


class InvalidPlaylistOffsetError(MplsError):
    """The PlayList block offset points into the header."""


class InvalidChapterOffsetError(MplsError):
    """The PlayListMark block offset points into the header."""


class InvalidChapterCountError(MplsError):
    """The declared mark records do not fit in the buffer."""


class InvalidTrimPointError(MplsError):
    """A global time-in/time-out is negative as a signed 32-bit value."""


class ShortReadError(MplsError):
    """Fewer bytes remain than a field needs."""


class OutOfBoundsError(MplsError):
    """A seek or absolute access falls outside the buffer."""


class InvalidClipIndexError(MplsError):
    """A chapter mark references a stream clip that does not exist."""
