"""Unit tests for the SymbolTable and the parsing options."""

import pytest

from volexity.gosymtab.models.parse_options import DEFAULT_MAX_NAME_LENGTH, ParseOptions
from volexity.gosymtab.sym.func import Symbol
from volexity.gosymtab.sym.parse_errors import TruncatedError
from volexity.gosymtab.sym.symbol_table import SymbolTable

SYMBOLS = [Symbol("runtime.rt0_go", 0x1000), Symbol("runtime.main", 0x1040), Symbol("main.main", 0x1100)]


def test_sequence_protocol() -> None:
    table = SymbolTable(SYMBOLS)

    assert len(table) == 3
    assert table[1] == Symbol("runtime.main", 0x1040)
    assert list(table[1:]) == SYMBOLS[1:]
    assert table == SYMBOLS
    assert table == SymbolTable(SYMBOLS)
    assert table.addresses == (0x1000, 0x1040, 0x1100)
    assert table.complete
    assert table.is_sorted


def test_lookup_sorted() -> None:
    table = SymbolTable(SYMBOLS)

    assert table.lookup(0xFFF) is None
    assert table.lookup(0x1000) == SYMBOLS[0]
    assert table.lookup(0x103F) == SYMBOLS[0]
    assert table.lookup(0x1050) == SYMBOLS[1]
    assert table.lookup(0x9000) == SYMBOLS[2]


def test_lookup_unsorted_degrades_to_scan() -> None:
    table = SymbolTable([SYMBOLS[2], SYMBOLS[0], SYMBOLS[1]])

    assert not table.is_sorted
    assert table.lookup(0x1050) == SYMBOLS[1]
    assert table.lookup(0x1200) == SYMBOLS[2]
    assert table.lookup(0x10) is None


def test_get_exact_entry() -> None:
    table = SymbolTable(SYMBOLS)

    assert table.get(0x1040) == SYMBOLS[1]
    assert table.get(0x1041) is None


def test_to_dict() -> None:
    assert SymbolTable(SYMBOLS).to_dict() == {
        "0x1000": "runtime.rt0_go",
        "0x1040": "runtime.main",
        "0x1100": "main.main",
    }


def test_partial_table() -> None:
    error = TruncatedError("Function descriptor 3 exceeds the buffer", offset=0x40, index=3)
    table = SymbolTable(SYMBOLS, error=error)

    assert not table.complete
    assert table.error is error
    assert "partial" in repr(table)
    assert str(error) == "Function descriptor 3 exceeds the buffer (at 0x40)"


def test_symbol_equality_ignores_meta_address() -> None:
    assert Symbol("main.main", 0x1000, 0x2000) == Symbol("main.main", 0x1000)
    assert Symbol("main.main", 0x1000).consistent


def test_default_options() -> None:
    options = ParseOptions()

    assert options.max_name_length == DEFAULT_MAX_NAME_LENGTH == 4096
    assert not options.allow_partial
    assert options.workers == 1


@pytest.mark.parametrize(("max_name_length", "workers"), [(0, 1), (-5, 1), (16, 0)])
def test_invalid_options(max_name_length: int, workers: int) -> None:
    with pytest.raises(ValueError):
        ParseOptions(max_name_length=max_name_length, workers=workers)
