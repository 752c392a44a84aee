"""Shared fixtures building synthetic PcLineTables."""

from collections.abc import Callable, Sequence
from typing import Final

import pytest

from volexity.gosymtab.sym.endian import Endian
from volexity.gosymtab.sym.pc_line_magic import PcLineMagic
from volexity.gosymtab.sym.table_layout import NAME_OFFSET_SIZE, TableLayout

# Literal table: magic at 0x100, 64 bytes Go 1.16 header, names "main\0init\0" at 0x140, descriptors at 0x150,
# metadata at 0x170 and 0x180.
SCENARIO_ANCHOR: Final[int] = 0x100
SCENARIO_NAMES_OFFSET: Final[int] = 0x140


def _scenario_table(names: bytes) -> bytes:
    header: Final[bytes] = (
        bytes.fromhex("FAFFFFFF00000108")
        + (2).to_bytes(8, "little")  # nfunc
        + (0).to_bytes(8, "little")  # nfiles
        + (0x40).to_bytes(8, "little")  # funcnameOffset
        + (0x4A).to_bytes(8, "little")  # cuOffset
        + (0x4A).to_bytes(8, "little")  # filetabOffset
        + (0x4A).to_bytes(8, "little")  # pctabOffset
        + (0x50).to_bytes(8, "little")  # pclnOffset
    )
    descriptors: Final[bytes] = (
        (0x1000).to_bytes(8, "little")
        + (0x20).to_bytes(8, "little")
        + (0x1010).to_bytes(8, "little")
        + (0x30).to_bytes(8, "little")
    )
    metas: Final[bytes] = (
        (0x1000).to_bytes(8, "little")
        + (0).to_bytes(4, "little")
        + bytes(4)
        + (0x1010).to_bytes(8, "little")
        + (5).to_bytes(4, "little")
        + bytes(4)
    )
    return bytes(SCENARIO_ANCHOR) + header + names + bytes(6) + descriptors + metas


@pytest.fixture
def scenario_table() -> bytes:
    """Literal two functions table resolving to main@0x1000 and init@0x1010."""
    return _scenario_table(b"main\x00init\x00")


@pytest.fixture
def unterminated_scenario_table() -> bytes:
    """The literal table with the first name terminator replaced."""
    return _scenario_table(b"main_init\x00")


@pytest.fixture
def overrunning_table() -> bytes:
    """Go 1.16 table claiming 3 functions while the buffer ends in the middle of the third descriptor.

    Each of the two valid descriptors points to itself as its metadata, the low half of its metadata offset doubling
    as the name offset: main@0x1000 (name offset 0x0) and init@0x1010 (name offset 0x10).
    """
    header: Final[bytes] = (
        bytes.fromhex("FAFFFFFF00000108")
        + (3).to_bytes(8, "little")  # nfunc
        + (0).to_bytes(8, "little")  # nfiles
        + (0x40).to_bytes(8, "little")  # funcnameOffset
        + (0x55).to_bytes(8, "little")  # cuOffset
        + (0x55).to_bytes(8, "little")  # filetabOffset
        + (0x55).to_bytes(8, "little")  # pctabOffset
        + (0x60).to_bytes(8, "little")  # pclnOffset
    )
    names: Final[bytes] = b"main\x00".ljust(0x10, b"\x00") + b"init\x00"
    descriptors: Final[bytes] = (
        (0x1000).to_bytes(8, "little")
        + (0x0).to_bytes(8, "little")
        + (0x1010).to_bytes(8, "little")
        + (0x10).to_bytes(8, "little")
    )
    return header + names + bytes(0x60 - 0x40 - len(names)) + descriptors + bytes(8)


def build_pclntab(
    functions: Sequence[tuple[int, str]],
    *,
    magic: PcLineMagic = PcLineMagic.GO_1_16,
    endian: Endian = Endian.LITTLE,
    pointer_size: int = 8,
    quantum: int = 1,
    text_start: int = 0,
    nfunc: int | None = None,
    prefix: bytes = b"",
    meta_addresses: Sequence[int] | None = None,
) -> bytes:
    """Build a PcLineTable holding the supplied functions.

    Layout: prefix, header, name table, descriptor table, metadata records.

    Args:
        functions: The (address, name) pairs of the functions, in table order.
        magic: The magic of the table, selecting its layout.
        endian: The byte order of the table.
        pointer_size: The word size of the target.
        quantum: The instruction quantum of the target.
        text_start: Base of the function addresses for Go 1.18+ layouts.
        nfunc: Overrides the function count of the header.
        prefix: Bytes preceding the table.
        meta_addresses: Overrides the addresses stored in the metadata records.

    Returns:
        The table bytes.
    """
    layout: Final[TableLayout | None] = magic.layout
    assert layout is not None

    def word(value: int, size: int = pointer_size) -> bytes:
        return endian.as_bytes(value, size)

    header_size: Final[int] = layout.header_size(pointer_size)
    field_size: Final[int] = layout.field_size(pointer_size)
    descriptor_size: Final[int] = layout.descriptor_size(pointer_size)
    meta_stride: Final[int] = -(-(field_size + NAME_OFFSET_SIZE) // field_size) * field_size

    names: bytes = b""
    name_offsets: list[int] = []
    for _, name in functions:
        name_offsets.append(len(names))
        names += name.encode() + b"\x00"

    end_of_names: Final[int] = header_size + len(names)
    pcln_offset: Final[int] = -(-end_of_names // 8) * 8
    meta_base: Final[int] = len(functions) * descriptor_size

    descriptors: bytes = b""
    metas: bytes = b""
    for index, (address, _) in enumerate(functions):
        meta_address: int = meta_addresses[index] if meta_addresses is not None else address
        descriptors += word(address - text_start, field_size) + word(meta_base + index * meta_stride, field_size)
        metas += word(meta_address - text_start, field_size) + word(name_offsets[index], NAME_OFFSET_SIZE)
        metas = metas.ljust((index + 1) * meta_stride, b"\x00")

    fields: Final[dict[str, int]] = {
        "nfunc": len(functions) if nfunc is None else nfunc,
        "nfiles": 0,
        "text_start": text_start,
        "funcname_offset": header_size,
        "cu_offset": end_of_names,
        "filetab_offset": end_of_names,
        "pctab_offset": end_of_names,
        "pcln_offset": pcln_offset,
    }
    header: Final[bytes] = (
        magic.pattern(endian)
        + bytes((quantum, pointer_size))
        + b"".join(word(fields[name]) for name in layout.fields)
    )
    assert len(header) == header_size

    return prefix + header + names.ljust(pcln_offset - header_size, b"\x00") + descriptors + metas


@pytest.fixture
def pclntab_builder() -> Callable[..., bytes]:
    """Returns the synthetic PcLineTable builder."""
    return build_pclntab
