"""Resolves the name of a function from its descriptor."""

import logging
from typing import Final

from .binary_reader import BinaryReader
from .buffer import Buffer
from .func import FuncData, FuncTab, Symbol
from .parse_errors import ParseError
from .pc_header import PcHeader

logger: Final[logging.Logger] = logging.getLogger(__name__)


class NameResolver:
    """Resolves the name of a function from its descriptor.

    descriptor -> metadata (function table base + metadata offset) -> name (name table base + name offset).
    """

    def __init__(self, buffer: Buffer, header: PcHeader, max_name_length: int) -> None:
        """Initialize a new NameResolver.

        Args:
            buffer: The buffer holding the PcLineTable.
            header: The decoded header of the PcLineTable.
            max_name_length: Maximum length of a function name, bounding the terminator scan.
        """
        self._buffer: Final[Buffer] = buffer
        self._header: Final[PcHeader] = header
        self._max_name_length: Final[int] = max_name_length
        self._field_size: Final[int] = header.layout.field_size(header.pointer_size)
        self._meta_size: Final[int] = header.layout.meta_size(header.pointer_size)

    def resolve(self, descriptor: FuncTab, index: int | None = None) -> Symbol:
        """Resolve the symbol of a function.

        Args:
            descriptor: The descriptor of the function.
            index: The index of the function in the table, attached to raised errors.

        Raise:
            TruncatedError: The metadata or the name exceeds the buffer.
            CorruptError: The name isn't terminated within the maximum name length.

        Returns:
            The resolved symbol.
        """
        try:
            return self._resolve(descriptor)
        except ParseError as e:
            if e.index is None:
                e.index = index
            raise

    def _resolve(self, descriptor: FuncTab) -> Symbol:
        meta_address: Final[int] = self._header.func_table_base + descriptor.meta_offset
        self._buffer.check_range(meta_address, self._meta_size, "function metadata")

        func_data: Final[FuncData] = FuncData(
            BinaryReader(self._buffer, self._header.endian, self._header.pointer_size, meta_address),
            self._field_size,
            self._header.text_start,
        )

        name_address: Final[int] = self._header.name_table_base + func_data.name_offset
        reader: Final[BinaryReader] = BinaryReader(self._buffer, self._header.endian, self._header.pointer_size)
        name: Final[str] = reader.read_cstr(self._max_name_length, offset=name_address)

        # NOTE: Obfuscators such as Garble may randomize the metadata entry, the descriptor stays authoritative.
        if func_data.entry != descriptor.address:
            logger.warning(
                f"Function {name} entry mismatch: descriptor {descriptor.address:#0x}, metadata {func_data.entry:#0x}"
            )

        return Symbol(name, descriptor.address, func_data.entry)
