"""Defines the magic numbers relating to each PcLineTable versions."""

from enum import IntEnum
from typing import Final

from .endian import Endian
from .table_layout import TableLayout

MAGIC_SIZE: Final[int] = 4
PAD: Final[bytes] = b"\x00\x00"


class PcLineMagic(IntEnum):
    """Defines the magic numbers relating to each PcLineTable versions."""

    GO_1_20 = 0xFFFFFFF1
    GO_1_18 = 0xFFFFFFF0
    GO_1_16 = 0xFFFFFFFA
    GO_1_2 = 0xFFFFFFFB

    @property
    def layout(self) -> TableLayout | None:
        """Returns the table layout of this version, `None` for versions recognized but not supported.

        Returns:
            The table layout (if supported).
        """
        match self:
            case PcLineMagic.GO_1_20 | PcLineMagic.GO_1_18:
                return TableLayout.GO_1_18
            case PcLineMagic.GO_1_16:
                return TableLayout.GO_1_16
            case _:
                return None

    def pattern(self, endian: Endian) -> bytes:
        """Returns the byte signature of the magic and its pads in the supplied byte order.

        Args:
            endian: The byte order of the table.

        Returns:
            The byte signature marking the start of the table.
        """
        return endian.as_bytes(self.value, MAGIC_SIZE) + PAD

