"""Field layouts of the PcLineTable header and function records for each supported Go version."""

from enum import Enum
from typing import Final

# Absolutes offsets
QUANTUM_OFFSET: Final[int] = 6
POINTER_SIZE_OFFSET: Final[int] = 7
PREFIX_SIZE: Final[int] = 8

# Size of the name offset in a function metadata record.
NAME_OFFSET_SIZE: Final[int] = 4


class TableLayout(Enum):
    """Field layouts of the PcLineTable header and function records for each supported Go version.

    Each variant lists the pointer-sized header fields following the 8 bytes prefix (magic, pads, quantum, pointer
    size) and the width of the function record fields, `None` meaning pointer-sized.
    """

    GO_1_16 = (
        ("nfunc", "nfiles", "funcname_offset", "cu_offset", "filetab_offset", "pctab_offset", "pcln_offset"),
        None,
    )
    GO_1_18 = (
        (
            "nfunc",
            "nfiles",
            "text_start",
            "funcname_offset",
            "cu_offset",
            "filetab_offset",
            "pctab_offset",
            "pcln_offset",
        ),
        4,
    )

    def __init__(self, fields: tuple[str, ...], record_field_size: int | None) -> None:
        """Initialize a new layout.

        Args:
            fields: Names of the pointer-sized header fields, in order.
            record_field_size: Width of the function record fields, `None` when pointer-sized.
        """
        self.fields: Final[tuple[str, ...]] = fields
        self._record_field_size: Final[int | None] = record_field_size

    @property
    def has_text_start(self) -> bool:
        """Returns whether function addresses are stored relative to the text section start."""
        return "text_start" in self.fields

    def header_size(self, pointer_size: int) -> int:
        """Returns the fixed size of the header.

        Args:
            pointer_size: The word size of the target architecture.

        Returns:
            The header size in bytes.
        """
        return PREFIX_SIZE + len(self.fields) * pointer_size

    def field_size(self, pointer_size: int) -> int:
        """Returns the width of the address and offset fields of the function records.

        Args:
            pointer_size: The word size of the target architecture.

        Returns:
            The field width in bytes.
        """
        return self._record_field_size or pointer_size

    def descriptor_size(self, pointer_size: int) -> int:
        """Returns the size of a function descriptor record (address, metadata offset).

        Args:
            pointer_size: The word size of the target architecture.

        Returns:
            The record size in bytes.
        """
        return 2 * self.field_size(pointer_size)

    def meta_size(self, pointer_size: int) -> int:
        """Returns the size of the leading part of a function metadata record (address, name offset).

        Args:
            pointer_size: The word size of the target architecture.

        Returns:
            The record size in bytes.
        """
        return self.field_size(pointer_size) + NAME_OFFSET_SIZE
