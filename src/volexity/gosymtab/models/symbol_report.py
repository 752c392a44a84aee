"""Go symbol recovery report of a sample."""

import json
from hashlib import md5, sha1, sha256
from typing import Final

from ..sym.symbol_table import SymbolTable


class SymbolReport:
    """Go symbol recovery report of a sample."""

    def __init__(self, sample_name: str, sample_data: bytes, symbol_table: SymbolTable, source: str) -> None:
        """Initialize a new SymbolReport.

        Args:
            sample_name: Name of the sample related to the report.
            sample_data: Raw data of the sample.
            symbol_table: The symbols extracted from the sample.
            source: Name of the section the symbol table was found in.
        """
        self._sample_name: Final[str] = sample_name
        self._symbol_table: Final[SymbolTable] = symbol_table
        self._source: Final[str] = source
        self._hash: Final[dict[str, str]] = {
            "SHA256": sha256(sample_data).hexdigest(),
            "SHA1": sha1(sample_data).hexdigest(),  # noqa: S324
            "MD5": md5(sample_data).hexdigest(),  # noqa: S324
        }

    def to_dict(self) -> dict:
        """Returns the dictionary representation of the SymbolReport.

        Returns:
            The dictionary representation of the SymbolReport.
        """
        header: Final[dict | None] = self._symbol_table.header.to_dict() if self._symbol_table.header else None
        error: Final[str | None] = str(self._symbol_table.error) if self._symbol_table.error else None
        return {
            "Sample": {"Name": self._sample_name, "Hash": self._hash},
            "Source": self._source,
            "PcLineTable": header,
            "Complete": self._symbol_table.complete,
            "Error": error,
            "Symbols": self._symbol_table.to_dict(),
        }

    def to_json(self, pretty: bool = False) -> str:
        """Returns the JSON representation of the SymbolReport.

        Args:
            pretty: Wheter to prettify the output or not.

        Returns:
            JSON text data.
        """
        return json.dumps(self.to_dict(), indent=4 if pretty else None)
