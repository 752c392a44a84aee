"""Reads the function descriptors of the PcLineTable."""

from collections.abc import Generator
from typing import Final

from .binary_reader import BinaryReader
from .buffer import Buffer
from .func import FuncTab
from .parse_errors import TruncatedError
from .pc_header import PcHeader


class FuncTableReader:
    """Reads the function descriptors of the PcLineTable.

    Descriptors are read on demand from the immutable buffer, iterating again reads them again.
    """

    def __init__(self, buffer: Buffer, header: PcHeader) -> None:
        """Initialize a new FuncTableReader.

        Args:
            buffer: The buffer holding the PcLineTable.
            header: The decoded header of the PcLineTable.
        """
        self._buffer: Final[Buffer] = buffer
        self._header: Final[PcHeader] = header
        self._field_size: Final[int] = header.layout.field_size(header.pointer_size)
        self._record_size: Final[int] = header.descriptor_size

    @property
    def base(self) -> int:
        """Returns the buffer offset of the first descriptor."""
        return self._header.func_table_base

    def __len__(self) -> int:
        """Returns the number of descriptors."""
        return self._header.nfunc

    def __getitem__(self, index: int) -> FuncTab:
        """Read the descriptor of the function at the supplied index.

        Args:
            index: Index of the function, in `[0, nfunc)`.

        Raise:
            IndexError: The index is out of range.
            TruncatedError: The record exceeds the buffer, `index` holds the number of descriptors before it.

        Returns:
            The function descriptor.
        """
        if not 0 <= index < len(self):
            msg = f"Function index {index} out of range"
            raise IndexError(msg)

        offset: Final[int] = self.base + index * self._record_size
        if not self._buffer.contains(offset, self._record_size):
            msg = f"Function descriptor {index} exceeds the buffer"
            raise TruncatedError(msg, offset=offset, index=index)

        reader: Final[BinaryReader] = BinaryReader(
            self._buffer, self._header.endian, self._header.pointer_size, offset
        )
        address: Final[int] = reader.read_int(self._field_size, what="function address")
        meta_offset: Final[int] = reader.read_int(self._field_size, what="function metadata offset")
        return FuncTab(address + self._header.text_start, meta_offset)

    def __iter__(self) -> Generator[FuncTab]:
        """Yield every function descriptor in table order.

        Returns:
            The function descriptors.
        """
        for index in range(len(self)):
            yield self[index]
