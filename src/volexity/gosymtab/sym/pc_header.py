"""Decodes the versioned header of the PcLineTable."""

# Ref: https://github.com/golang/go/blob/master/src/runtime/symtab.go (pcHeader)
# Ref: https://github.com/golang/go/blob/master/src/cmd/link/internal/ld/pcln.go

import logging
from dataclasses import dataclass
from typing import Final

from .anchor_locator import Anchor
from .binary_reader import BinaryReader
from .buffer import Buffer
from .endian import Endian
from .parse_errors import CorruptError, UnsupportedVersionError
from .pc_line_magic import MAGIC_SIZE, PAD, PcLineMagic
from .table_layout import POINTER_SIZE_OFFSET, PREFIX_SIZE, QUANTUM_OFFSET, TableLayout

logger: Final[logging.Logger] = logging.getLogger(__name__)

VALID_POINTER_SIZES: Final[tuple[int, ...]] = (4, 8)
VALID_QUANTUMS: Final[tuple[int, ...]] = (1, 2, 4)  # x86: 1, s390x: 2, ARM: 4
OFFSET_FIELDS: Final[tuple[str, ...]] = (
    "funcname_offset",
    "cu_offset",
    "filetab_offset",
    "pctab_offset",
    "pcln_offset",
)


@dataclass(frozen=True)
class PcHeader:
    """Decoded PcLineTable header.

    All `*_offset` fields are relative to `anchor`.
    """

    anchor: int
    magic: PcLineMagic
    endian: Endian
    quantum: int
    pointer_size: int
    nfunc: int
    nfiles: int
    text_start: int
    funcname_offset: int
    cu_offset: int
    filetab_offset: int
    pctab_offset: int
    pcln_offset: int

    @property
    def layout(self) -> TableLayout:
        """Returns the layout of the table."""
        layout: Final[TableLayout | None] = self.magic.layout
        if layout is None:
            msg = f"No layout for {self.magic.name}"
            raise UnsupportedVersionError(msg, offset=self.anchor)
        return layout

    @property
    def header_size(self) -> int:
        """Returns the fixed size of the header in bytes."""
        return self.layout.header_size(self.pointer_size)

    @property
    def descriptor_size(self) -> int:
        """Returns the size of a function descriptor record."""
        return self.layout.descriptor_size(self.pointer_size)

    @property
    def name_table_base(self) -> int:
        """Returns the buffer offset of the function name table."""
        return self.anchor + self.funcname_offset

    @property
    def func_table_base(self) -> int:
        """Returns the buffer offset of the function descriptor table."""
        return self.anchor + self.pcln_offset

    def to_dict(self) -> dict:
        """Returns the dictionary representation of the PcHeader.

        Returns:
            The dictionary representation of the PcHeader.
        """
        return {
            "Offset": hex(self.anchor),
            "Version": self.magic.name,
            "Endian": str(self.endian),
            "Quantum": self.quantum,
            "Pointer Size": self.pointer_size,
            "Functions": self.nfunc,
            "Files": self.nfiles,
            "Text Start": hex(self.text_start),
        }

    @staticmethod
    def decode(buffer: Buffer, anchor: Anchor) -> "PcHeader":
        """Decode the header located at the supplied anchor.

        Args:
            buffer: The buffer holding the PcLineTable.
            anchor: The location and version of the header.

        Raise:
            UnsupportedVersionError: The magic has no known layout.
            TruncatedError: The header exceeds the buffer.
            CorruptError: A header field is out of its valid range.

        Returns:
            The decoded header.
        """
        layout: Final[TableLayout | None] = anchor.magic.layout
        if layout is None:
            msg = f"PcLineTable version {anchor.magic.name} isn't supported"
            raise UnsupportedVersionError(msg, offset=anchor.offset)

        prefix: Final[bytes] = buffer.read_bytes(anchor.offset, PREFIX_SIZE, "pcHeader prefix")
        if prefix[MAGIC_SIZE : MAGIC_SIZE + len(PAD)] != PAD:
            msg = "Invalid pcHeader pads"
            raise CorruptError(msg, offset=anchor.offset)

        quantum: Final[int] = prefix[QUANTUM_OFFSET]
        pointer_size: Final[int] = prefix[POINTER_SIZE_OFFSET]
        if pointer_size not in VALID_POINTER_SIZES:
            msg = f"Invalid pointer size {pointer_size}"
            raise CorruptError(msg, offset=anchor.offset + POINTER_SIZE_OFFSET)
        if quantum not in VALID_QUANTUMS:
            msg = f"Invalid instruction quantum {quantum}"
            raise CorruptError(msg, offset=anchor.offset + QUANTUM_OFFSET)

        buffer.check_range(anchor.offset, layout.header_size(pointer_size), "pcHeader")

        reader: Final[BinaryReader] = BinaryReader(buffer, anchor.endian, pointer_size, anchor.offset + PREFIX_SIZE)
        fields: Final[dict[str, int]] = {name: reader.read_word(what=name) for name in layout.fields}
        if not layout.has_text_start:
            fields["text_start"] = 0

        header: Final[PcHeader] = PcHeader(
            anchor=anchor.offset,
            magic=anchor.magic,
            endian=anchor.endian,
            quantum=quantum,
            pointer_size=pointer_size,
            **fields,
        )
        header._validate(buffer)

        logger.debug(
            f"Decoded {header.magic.name} pcHeader at {header.anchor:#0x}: {header.nfunc} functions, "
            f"names at {header.name_table_base:#0x}, descriptors at {header.func_table_base:#0x}"
        )
        return header

    def _validate(self, buffer: Buffer) -> None:
        """Check the decoded counts and offsets against the buffer bounds.

        Args:
            buffer: The buffer holding the PcLineTable.
        """
        if self.nfunc >> (self.pointer_size * 8 - 1):
            msg = f"Negative function count {self.nfunc:#x}"
            raise CorruptError(msg, offset=self.anchor)
        if self.nfunc * self.descriptor_size > len(buffer):
            msg = f"Function count {self.nfunc:#x} exceeds the buffer size"
            raise CorruptError(msg, offset=self.anchor)

        for name in OFFSET_FIELDS:
            value: int = getattr(self, name)
            if not buffer.contains(self.anchor + value):
                msg = f"Field {name} ({value:#x}) points outside of the buffer"
                raise CorruptError(msg, offset=self.anchor)
