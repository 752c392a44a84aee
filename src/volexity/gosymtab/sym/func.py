"""Go Function records and symbols."""

from dataclasses import dataclass, field
from typing import Final

from .binary_reader import BinaryReader
from .table_layout import NAME_OFFSET_SIZE


@dataclass(frozen=True)
class Symbol:
    """Go Function symbol.

    `address` comes from the function descriptor and is authoritative, `meta_address` is the copy held by the
    function metadata.
    """

    name: str
    address: int
    meta_address: int = field(default=-1, compare=False)

    @property
    def consistent(self) -> bool:
        """Returns whether the descriptor and metadata agree on the function address."""
        return self.meta_address in (-1, self.address)


@dataclass(frozen=True)
class FuncTab:
    """Go Function descriptor: entry point and offset of the function metadata."""

    address: int
    meta_offset: int


class FuncData:
    """Go Function metadata parser."""

    def __init__(self, func_reader: BinaryReader, field_size: int, text_start: int = 0) -> None:
        """Parses new function metadata from a binary reader.

        Args:
            func_reader: The binary reader to fetch the function metadata from.
            field_size: The size of the entry field.
            text_start: Base of the entry field when stored as an offset.
        """
        self.entry: Final[int] = func_reader.read_int(field_size, what="function entry") + text_start
        self.name_offset: Final[int] = func_reader.read_int(NAME_OFFSET_SIZE, what="function name offset")
        # More fields not useful for this tool...
