"""The BinaryReader allows the parsing of a Buffer in a stream-like fashion."""

from typing import Final

from .buffer import Buffer
from .cstr import Cstr
from .endian import Endian


class BinaryReader:
    """The BinaryReader allows the parsing of a Buffer in a stream-like fashion.

    Every read is bounds-checked by the underlying Buffer and raises a `TruncatedError` when it would overrun it.
    """

    def __init__(self, buffer: Buffer, endian: Endian, pointer_size: int, offset: int | None = None) -> None:
        """Initialize a new BinaryReader.

        Args:
            buffer: The data to parse from.
            endian: The byte order of the parsed integers.
            pointer_size: The word size of the target architecture.
            offset: The offset in the data to start from.
        """
        self._buffer: Final[Buffer] = buffer
        self._endian: Final[Endian] = endian
        self._pointer_size: Final[int] = pointer_size
        self.offset: int = offset if offset is not None else 0

    def read_int(self, size: int, offset: int | None = None, what: str = "integer") -> int:
        """Parse an unsigned integer of the specified size.

        Args:
            size: The size of the integer to parse.
            offset: The absolute offset to parse the integer from.
            what: Description of the field being read.

        Returns:
            The parsed integer.
        """
        if offset is not None:
            self.offset = offset
        value: Final[int] = self._buffer.read_int(self.offset, size, self._endian, what)
        self.offset += size
        return value

    def read_word(self, offset: int | None = None, what: str = "word") -> int:
        """Parse an integer of the current architecture word's size.

        Args:
            offset: The absolute offset to parse the integer from.
            what: Description of the field being read.

        Returns:
            The parsed integer.
        """
        return self.read_int(self._pointer_size, offset=offset, what=what)

    def read_cstr(self, max_length: int, offset: int | None = None) -> str:
        """Parse a null terminated string of at most `max_length` bytes.

        Args:
            max_length: The maximum length of the string.
            offset: The absolute offset to parse the string from.

        Returns:
            The parsed string.
        """
        if offset is not None:
            self.offset = offset
        cstr: Final[Cstr] = Cstr(self._buffer, self.offset, max_length)
        self.offset += len(cstr) + 1
        return str(cstr)
