"""Big-endian binary reader for parsing MPLS structures."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Union

from mplsparse.errors import FileOpenError, OutOfBoundsError, ShortReadError


class BinaryReader:
    """Reads big-endian binary data with cursor tracking and helpful errors."""

    __slots__ = ("_data", "_pos", "_start", "_end", "_path")

    def __init__(
        self, source: Union[bytes, memoryview, str, Path], *, path: str | None = None
    ) -> None:
        if isinstance(source, (str, Path)):
            p = Path(source)
            try:
                self._data = memoryview(p.read_bytes())
            except OSError as e:
                raise FileOpenError(f"unable to open for reading ({e.strerror})", str(p)) from e
            self._path: str | None = str(p)
        else:
            self._data = memoryview(source) if not isinstance(source, memoryview) else source
            self._path = path
        self._pos: int = 0
        self._start: int = 0
        self._end: int = len(self._data)

    # -- context manager --

    def __enter__(self) -> BinaryReader:
        return self

    def __exit__(self, *_: object) -> None:
        self._data.release()

    # -- cursor --

    @property
    def path(self) -> str | None:
        """Source file path, if the reader was opened from (or labelled with) one."""
        return self._path

    def __len__(self) -> int:
        return self._end - self._start

    def tell(self) -> int:
        """Return the current read position relative to the slice start."""
        return self._pos - self._start

    def seek(self, offset: int) -> None:
        """Set the read position relative to the slice start."""
        absolute = self._start + offset
        if absolute < self._start or absolute > self._end:
            raise OutOfBoundsError(
                f"seek to offset {offset} out of range [0, {self._end - self._start}]",
                self._path,
            )
        self._pos = absolute

    def skip(self, n: int) -> None:
        """Advance the read position by *n* bytes."""
        self.require(n)
        self._pos += n

    @property
    def remaining(self) -> int:
        """Number of unread bytes from the current position."""
        return self._end - self._pos

    # -- guards --

    def require(self, n: int) -> None:
        """Raise if fewer than *n* bytes remain at the current position."""
        if self._end - self._pos < n:
            raise ShortReadError(
                f"need {n} bytes at offset {self.tell()}, but only {self._end - self._pos} remain",
                self._path,
            )

    def require_at(self, offset: int, n: int) -> None:
        """Raise if fewer than *n* bytes available starting at *offset*."""
        absolute = self._start + offset
        if absolute < self._start or absolute + n > self._end:
            raise OutOfBoundsError(
                f"need {n} bytes at offset {offset}, but range is [0, {self._end - self._start}]",
                self._path,
            )

    # -- slicing --

    def slice(self, offset: int, length: int) -> BinaryReader:
        """Return a new reader over a sub-range without copying."""
        self.require_at(offset, length)
        absolute = self._start + offset
        child = object.__new__(BinaryReader)
        child._data = self._data
        child._start = absolute
        child._end = absolute + length
        child._pos = absolute
        child._path = self._path
        return child

    # -- primitive reads (big-endian) --

    def read_bytes(self, n: int) -> bytes:
        """Read *n* raw bytes and advance the cursor."""
        self.require(n)
        result = bytes(self._data[self._pos : self._pos + n])
        self._pos += n
        return result

    def _read_fmt(self, fmt: str, size: int) -> int:
        self.require(size)
        (value,) = struct.unpack_from(fmt, self._data, self._pos)
        self._pos += size
        return value

    def u8(self) -> int:
        """Read an unsigned 8-bit integer."""
        return self._read_fmt(">B", 1)

    def u16(self) -> int:
        """Read a big-endian unsigned 16-bit integer."""
        return self._read_fmt(">H", 2)

    def u32(self) -> int:
        """Read a big-endian unsigned 32-bit integer."""
        return self._read_fmt(">I", 4)

    def u8_at(self, offset: int) -> int:
        """Read an unsigned 8-bit integer at *offset* without moving the cursor."""
        self.require_at(offset, 1)
        return self._data[self._start + offset]

    def u16_at(self, offset: int) -> int:
        """Read a big-endian u16 at *offset* without moving the cursor."""
        self.require_at(offset, 2)
        return struct.unpack_from(">H", self._data, self._start + offset)[0]

    def u32_at(self, offset: int) -> int:
        """Read a big-endian u32 at *offset* without moving the cursor."""
        self.require_at(offset, 4)
        return struct.unpack_from(">I", self._data, self._start + offset)[0]

    # -- string reads --

    def read_string(self, n: int) -> str:
        """Read *n* bytes as fixed-width text.

        Bytes are kept as-is (latin-1), so odd values in a name never fail to
        decode and the cursor always moves by exactly *n*.
        """
        return self.read_bytes(n).decode("latin-1")
