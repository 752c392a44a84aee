"""Localize the PcLineTable header by scanning a buffer for its magic."""

import heapq
import logging
from collections.abc import Generator, Iterator
from dataclasses import dataclass
from typing import Final

from .buffer import Buffer
from .endian import Endian
from .parse_errors import NotFoundError, UnsupportedVersionError
from .pc_line_magic import PcLineMagic
from .signature import GO_LIKE_HEADER_SIG

logger: Final[logging.Logger] = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anchor:
    """Location and version of a PcLineTable header."""

    offset: int
    magic: PcLineMagic
    endian: Endian


class AnchorLocator:
    """Localize the PcLineTable header by scanning a buffer for its magic.

    The first match by position wins. Decoy bytes placed ahead of the real table can mislead this heuristic, the only
    verification being the header decoding that follows.
    """

    @staticmethod
    def candidates(buffer: Buffer) -> Generator[Anchor]:
        """Yield every occurrence of a supported magic in the buffer, ordered by position.

        Args:
            buffer: The buffer to scan.

        Returns:
            The anchors of every occurrence.
        """
        scans: Final[list[Iterator[Anchor]]] = [
            AnchorLocator._scan(buffer, magic, endian)
            for magic in PcLineMagic
            if magic.layout is not None
            for endian in (Endian.LITTLE, Endian.BIG)
        ]
        yield from heapq.merge(*scans, key=lambda anchor: anchor.offset)

    @staticmethod
    def _scan(buffer: Buffer, magic: PcLineMagic, endian: Endian) -> Generator[Anchor]:
        """Yield every occurrence of a single magic in a single byte order.

        Args:
            buffer: The buffer to scan.
            magic: The magic to look for.
            endian: The byte order of the magic.

        Returns:
            The anchors of every occurrence.
        """
        for offset in buffer.find_all(magic.pattern(endian)):
            yield Anchor(offset, magic, endian)

    @staticmethod
    def locate(buffer: Buffer) -> Anchor:
        """Localize the first PcLineTable header of the buffer.

        Args:
            buffer: The buffer to scan.

        Raise:
            NotFoundError: No known magic in the buffer.
            UnsupportedVersionError: No supported magic, but a legacy magic or a header-like pattern with an unknown
                magic is present.

        Returns:
            The anchor of the first occurrence.
        """
        anchor: Final[Anchor | None] = next(AnchorLocator.candidates(buffer), None)
        if anchor is not None:
            logger.debug(f"Localized {anchor.magic.name} {anchor.endian} magic at {anchor.offset:#0x}")
            return anchor

        legacy_scans: Final[list[Iterator[Anchor]]] = [
            AnchorLocator._scan(buffer, magic, endian)
            for magic in PcLineMagic
            if magic.layout is None
            for endian in (Endian.LITTLE, Endian.BIG)
        ]
        if legacy := next(heapq.merge(*legacy_scans, key=lambda anchor: anchor.offset), None):
            msg = f"PcLineTable version {legacy.magic.name} isn't supported"
            raise UnsupportedVersionError(msg, offset=legacy.offset)

        if go_like := GO_LIKE_HEADER_SIG.match(buffer.data):
            offset: Final[int] = go_like[0][0]
            msg = f"Unknown PcLineTable magic {go_like[0][1][:4].hex()}"
            raise UnsupportedVersionError(msg, offset=offset)

        msg = "No PcLineTable magic in the buffer"
        raise NotFoundError(msg)
