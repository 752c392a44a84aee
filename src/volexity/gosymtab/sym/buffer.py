"""Immutable, bounds-checked view over the bytes being parsed."""

from collections.abc import Iterator
from typing import Final

from .endian import Endian
from .parse_errors import TruncatedError


class Buffer:
    """Immutable, bounds-checked view over the bytes being parsed.

    Every read validates its range against the length of the data and raises a `TruncatedError` rather than returning
    short or zero-filled data.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize a new Buffer.

        Args:
            data: The bytes to borrow. Mutable inputs are copied so the view stays immutable.
        """
        self._data: Final[bytes] = data if isinstance(data, bytes) else bytes(data)

    @property
    def data(self) -> bytes:
        """Returns the raw bytes of the buffer.

        Returns:
            Raw bytes of the buffer.
        """
        return self._data

    def __len__(self) -> int:
        """Returns the length of the Buffer.

        Returns:
            Length of the buffer.
        """
        return len(self._data)

    def contains(self, offset: int, size: int = 0) -> bool:
        """Returns whether the range `[offset, offset + size)` lies within the buffer.

        Args:
            offset: Start of the range.
            size: Size of the range.

        Returns:
            Whether the range is in bounds.
        """
        return offset >= 0 and size >= 0 and offset + size <= len(self._data)

    def check_range(self, offset: int, size: int, what: str = "data") -> None:
        """Raise a TruncatedError if the range `[offset, offset + size)` is out of bounds.

        Args:
            offset: Start of the range.
            size: Size of the range.
            what: Description of the data being read, used in the error message.
        """
        if not self.contains(offset, size):
            msg = f"Reading {size:#x} bytes of {what} exceeds the buffer of {len(self._data):#x} bytes"
            raise TruncatedError(msg, offset=offset)

    def read_bytes(self, offset: int, size: int, what: str = "data") -> bytes:
        """Read a byte sequence of the specified size.

        Args:
            offset: The absolute offset to read from.
            size: The size of the byte sequence to read.
            what: Description of the data being read.

        Returns:
            The read byte sequence.
        """
        self.check_range(offset, size, what)
        return self._data[offset : offset + size]

    def read_int(self, offset: int, size: int, endian: Endian, what: str = "integer") -> int:
        """Parse an unsigned integer of the specified size.

        Args:
            offset: The absolute offset to parse the integer from.
            size: The size of the integer to parse.
            endian: The byte order of the integer.
            what: Description of the data being read.

        Returns:
            The parsed integer.
        """
        self.check_range(offset, size, what)
        return endian.parse_int(self._data, size, offset)

    def find_all(self, pattern: bytes, start: int = 0) -> Iterator[int]:
        """Yield every offset at which the pattern occurs, in ascending order.

        Args:
            pattern: The byte pattern to look for.
            start: The offset at which to start searching.

        Returns:
            The offsets of every occurrence.
        """
        offset: int = self._data.find(pattern, start)
        while offset != -1:
            yield offset
            offset = self._data.find(pattern, offset + 1)
