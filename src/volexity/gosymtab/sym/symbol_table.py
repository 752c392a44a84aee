"""Ordered, immutable collection of the resolved Go function symbols."""

from bisect import bisect_right
from collections.abc import Iterable, Iterator, Sequence
from itertools import pairwise
from typing import TYPE_CHECKING, Final, overload

from typing_extensions import override

from .func import Symbol

if TYPE_CHECKING:
    from .parse_errors import ParseError
    from .pc_header import PcHeader


class SymbolTable(Sequence[Symbol]):
    """Ordered, immutable collection of the resolved Go function symbols.

    Symbols keep the order of the function descriptors, which is ascending by address in well-formed tables.
    """

    def __init__(
        self, symbols: Iterable[Symbol], header: "PcHeader | None" = None, error: "ParseError | None" = None
    ) -> None:
        """Initialize a new SymbolTable.

        Args:
            symbols: The resolved symbols, in descriptor order.
            header: The header of the table the symbols were resolved from.
            error: The failure that interrupted the resolution, for partial tables.
        """
        self._symbols: Final[tuple[Symbol, ...]] = tuple(symbols)
        self._addresses: Final[tuple[int, ...]] = tuple(symbol.address for symbol in self._symbols)
        self._sorted: Final[bool] = all(a <= b for a, b in pairwise(self._addresses))
        self._header: Final[PcHeader | None] = header
        self._error: Final[ParseError | None] = error

    @property
    def header(self) -> "PcHeader | None":
        """Returns the header of the table the symbols were resolved from (if any)."""
        return self._header

    @property
    def error(self) -> "ParseError | None":
        """Returns the failure that interrupted the resolution (if any)."""
        return self._error

    @property
    def complete(self) -> bool:
        """Returns whether every function of the table was resolved."""
        return self._error is None

    @property
    def is_sorted(self) -> bool:
        """Returns whether the symbol addresses are non-decreasing."""
        return self._sorted

    @property
    def addresses(self) -> tuple[int, ...]:
        """Returns the addresses of the symbols, in table order."""
        return self._addresses

    @overload
    def __getitem__(self, index: int) -> Symbol: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Symbol]: ...

    @override
    def __getitem__(self, index: int | slice) -> Symbol | Sequence[Symbol]:
        return self._symbols[index]

    @override
    def __len__(self) -> int:
        return len(self._symbols)

    @override
    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        """Tests the equality between this and another SymbolTable or sequence of symbols.

        Args:
            other: The object to compare to.

        Returns:
            Whether both hold the same symbols in the same order.
        """
        if isinstance(other, SymbolTable):
            return self._symbols == other._symbols
        if isinstance(other, Sequence) and not isinstance(other, str | bytes):
            return list(self._symbols) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        """Returns the hash of the symbols."""
        return hash(self._symbols)

    def __repr__(self) -> str:
        """SymbolTable representation."""
        state: Final[str] = "complete" if self.complete else f"partial: {self._error}"
        return f"<SymbolTable {len(self)} symbols, {state}>"

    def get(self, address: int) -> Symbol | None:
        """Get the symbol whose entry point is the supplied address (if any).

        Args:
            address: The entry point of the function.

        Returns:
            The symbol (if any).
        """
        symbol: Final[Symbol | None] = self.lookup(address)
        return symbol if symbol is not None and symbol.address == address else None

    def lookup(self, address: int) -> Symbol | None:
        """Get the symbol of the function containing the supplied address.

        The containing function is the one with the greatest entry point lower or equal to the address. Uses a binary
        search on sorted tables, and a linear scan otherwise.

        Args:
            address: The address to look up.

        Returns:
            The symbol of the containing function (if any).
        """
        if self._sorted:
            position: Final[int] = bisect_right(self._addresses, address)
            return self._symbols[position - 1] if position else None

        best: Symbol | None = None
        for symbol in self._symbols:
            if symbol.address <= address and (best is None or symbol.address > best.address):
                best = symbol
        return best

    def to_dict(self) -> dict[str, str]:
        """Returns the dictionary representation of the symbol table.

        Returns:
            Dictionary of the symbols in a (hex entry -> name) configuration.
        """
        return {hex(symbol.address): symbol.name for symbol in self._symbols}
