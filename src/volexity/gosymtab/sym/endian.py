"""Unsigned integer decoding in either byte order."""

from enum import StrEnum, auto
from typing import Literal


class Endian(StrEnum):
    """Unsigned integer decoding in either byte order."""

    BIG = auto()
    LITTLE = auto()

    @property
    def byteorder(self) -> Literal["little", "big"]:
        """Returns the byte order name understood by `int.from_bytes`."""
        match self:
            case Endian.LITTLE:
                return "little"
            case Endian.BIG:
                return "big"

    def parse_int(self, data: bytes | memoryview, size: int, offset: int = 0) -> int:
        """Parse an unsigned integer of the current endianess.

        The caller is responsible for checking that `offset + size` lies within the data.

        Args:
            data: The data to parse the integer from.
            size: The size of the integer to parse.
            offset: The offset in the data from which to parse the integer.

        Returns:
            The parsed integer.
        """
        return int.from_bytes(data[offset : offset + size], self.byteorder)

    def as_bytes(self, value: int, size: int) -> bytes:
        """Return the byte representation of the supplied value in the current endianess.

        Args:
            value: The value to convert.
            size: The number of bytes to use.

        Returns:
            The byte representation of the supplied value.
        """
        return value.to_bytes(size, self.byteorder)
