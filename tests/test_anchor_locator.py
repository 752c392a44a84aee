"""Unit tests for the PcLineTable anchor locator."""

import pytest

from volexity.gosymtab.sym.anchor_locator import Anchor, AnchorLocator
from volexity.gosymtab.sym.buffer import Buffer
from volexity.gosymtab.sym.endian import Endian
from volexity.gosymtab.sym.parse_errors import NotFoundError, ParseErrorKind, UnsupportedVersionError
from volexity.gosymtab.sym.pc_line_magic import PcLineMagic

from .conftest import SCENARIO_ANCHOR


def test_locate_scenario_anchor(scenario_table: bytes) -> None:
    anchor = AnchorLocator.locate(Buffer(scenario_table))

    assert anchor == Anchor(SCENARIO_ANCHOR, PcLineMagic.GO_1_16, Endian.LITTLE)


def test_locate_first_by_position() -> None:
    data = bytes(0x10) + bytes.fromhex("F0FFFFFF0000") + bytes(0x20) + bytes.fromhex("FAFFFFFF0000") + bytes(8)

    anchor = AnchorLocator.locate(Buffer(data))

    assert anchor.offset == 0x10
    assert anchor.magic == PcLineMagic.GO_1_18


def test_locate_big_endian() -> None:
    data = bytes(3) + bytes.fromhex("FFFFFFF10000") + bytes(8)

    anchor = AnchorLocator.locate(Buffer(data))

    assert anchor == Anchor(3, PcLineMagic.GO_1_20, Endian.BIG)


def test_candidates_are_ordered() -> None:
    data = (
        bytes.fromhex("FAFFFFFF0000")
        + bytes.fromhex("FFFFFFFB0000")
        + bytes.fromhex("F1FFFFFF0000")
        + bytes.fromhex("FFFFFFF00000")
    )

    candidates = list(AnchorLocator.candidates(Buffer(data)))

    assert [candidate.offset for candidate in candidates] == [0, 12, 18]
    assert [candidate.magic for candidate in candidates] == [
        PcLineMagic.GO_1_16,
        PcLineMagic.GO_1_20,
        PcLineMagic.GO_1_18,
    ]
    assert candidates[2].endian == Endian.BIG


def test_legacy_magic_is_not_a_candidate() -> None:
    data = bytes(0x10) + bytes.fromhex("FBFFFFFF0000") + bytes(0x10) + bytes.fromhex("F0FFFFFF0000") + bytes(8)

    anchor = AnchorLocator.locate(Buffer(data))

    assert anchor == Anchor(0x26, PcLineMagic.GO_1_18, Endian.LITTLE)


@pytest.mark.parametrize("magic", ["FBFFFFFF0000", "FFFFFFFB0000"])
def test_legacy_magic_alone_is_unsupported(magic: str) -> None:
    data = bytes(0x18) + bytes.fromhex(magic) + bytes(0x20)

    with pytest.raises(UnsupportedVersionError) as exc_info:
        AnchorLocator.locate(Buffer(data))

    assert exc_info.value.offset == 0x18
    assert "GO_1_2" in exc_info.value.message


def test_magic_without_pads_is_ignored() -> None:
    with pytest.raises(NotFoundError):
        AnchorLocator.locate(Buffer(bytes.fromhex("FAFFFFFF0100") + bytes(16)))


def test_no_magic_is_not_found() -> None:
    with pytest.raises(NotFoundError) as exc_info:
        AnchorLocator.locate(Buffer(b"\x7fELF" + bytes(252)))

    assert exc_info.value.kind == ParseErrorKind.NOT_FOUND


def test_unknown_go_like_magic_is_unsupported() -> None:
    data = bytes(0x20) + bytes.fromhex("F5FFFFFF00000108") + bytes(0x40)

    with pytest.raises(UnsupportedVersionError) as exc_info:
        AnchorLocator.locate(Buffer(data))

    assert exc_info.value.offset == 0x20
