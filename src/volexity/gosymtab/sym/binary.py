"""Load a binary and provide the byte ranges likely to hold its PcLineTable across PE, ELF and Mach-O formats."""

import logging
from collections.abc import Generator, Iterable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Final

import lief

from .buffer import Buffer

logger: Final[logging.Logger] = logging.getLogger(__name__)

# Sections in which the Go linker emits the PcLineTable, in order of likelihood.
PCLNTAB_SECTIONS: Final[tuple[str, ...]] = (
    ".gopclntab",  # ELF
    "__gopclntab",  # Mach-O
    ".data.rel.ro",  # ELF PIE
    ".rdata",  # PE
    "__rodata",  # Mach-O
)
WHOLE_FILE: Final[str] = "<file>"


class BinaryFormat(Enum):
    """Enumeration of the supported binary formats."""

    PE = auto()
    ELF = auto()
    MACH_O = auto()
    RAW = auto()


@dataclass(frozen=True)
class BinarySection:
    """Abstraction of a section within a Binary."""

    name: str
    offset: int
    size: int


class Binary:
    """Load a binary and provide the byte ranges likely to hold its PcLineTable across PE, ELF and Mach-O formats."""

    def __init__(self, path: Path, *, raw: bool = False) -> None:
        """Loads and initialize a new Binary.

        Args:
            path: Path to the binary to initialize.
            raw: Skip the executable format parsing and consider the file as a single blob.
        """
        self._path: Final[Path] = path
        with path.open("rb") as file:
            self._bin_data: Final[bytes] = file.read()

        self._format: BinaryFormat = BinaryFormat.RAW
        self._sections: list[BinarySection] = []
        if not raw:
            self._parse_sections()

    def _parse_sections(self) -> None:
        """Parse the executable format and sections of the binary, leaving it RAW when unrecognized."""
        parsed_binary: Final[lief.Binary | None] = lief.parse(self._bin_data)
        if parsed_binary is None:
            logger.warning(f"Couldn't parse {self.name} as an executable, scanning it as a raw blob.")
            return

        match parsed_binary.format:
            case lief.Binary.FORMATS.PE:
                self._format = BinaryFormat.PE
            case lief.Binary.FORMATS.ELF:
                self._format = BinaryFormat.ELF
            case lief.Binary.FORMATS.MACHO:
                self._format = BinaryFormat.MACH_O
            case _:
                logger.warning(f"Unsupported executable format for {self.name}, scanning it as a raw blob.")
                return

        self._sections = [
            BinarySection(str(section.name), section.offset, section.size)
            for section in parsed_binary.sections
            if section.size
        ]

    @property
    def name(self) -> str:
        """Return the name of the binary.

        Returns:
            The name of the binary.
        """
        return self._path.name

    @property
    def data(self) -> bytes:
        """Return the raw byte data of the binary.

        Returns:
            Raw data of the binary.
        """
        return self._bin_data

    @property
    def format(self) -> BinaryFormat:
        """Returns the binary executable format.

        Returns:
            Executable format of the binary.
        """
        return self._format

    @property
    def sections(self) -> Iterable[BinarySection]:
        """Returns the list of BinarySection of the binary.

        Returns:
            The list of BinarySections of the binary.
        """
        return self._sections

    def get_section(self, name: str) -> BinarySection | None:
        """Get the section with the specified name (if any).

        Args:
            name: The name of the section to retrieve.

        Returns:
            The retrieved section (if any).
        """
        return next((section for section in self._sections if section.name == name), None)

    def pclntab_candidates(self) -> Generator[tuple[str, Buffer]]:
        """Yield the byte ranges likely to hold the PcLineTable, the whole file last.

        Returns:
            (name, buffer) pairs for each candidate range.
        """
        for name in PCLNTAB_SECTIONS:
            if section := self.get_section(name):
                logger.debug(f"Candidate section {name} at {section.offset:#0x}:{section.size:#0x}")
                yield name, Buffer(self._bin_data[section.offset : section.offset + section.size])
        yield WHOLE_FILE, Buffer(self._bin_data)

    def __len__(self) -> int:
        """Returns the length of the Binary.

        Returns:
            Length of the binary.
        """
        return len(self._bin_data)
