"""Go Symbol Parser."""

# Ref: https://cloud.google.com/blog/topics/threat-intelligence/golang-internals-symbol-recovery/?hl=en
# Ref: https://docs.google.com/document/d/1lyPIbmsYbXnpNj57a261hgOYVpNRcgydurVQIyZOz_o/pub
# Ref: https://www.pnfsoftware.com/blog/analyzing-golang-executables/
# Ref: https://github.com/golang/go/tree/2cb9042dc2d5fdf6013305a077d013dbbfbaac06/src/debug/gosym
# Ref: https://github.com/golang/go/blob/master/src/cmd/link/internal/ld/pcln.go

import logging
from typing import Final

from multiprocess.pool import ThreadPool  # type: ignore[import-untyped]

from ..models.parse_options import ParseOptions
from ..models.parse_state import ParseState
from .anchor_locator import Anchor, AnchorLocator
from .buffer import Buffer
from .func import Symbol
from .func_table_reader import FuncTableReader
from .name_resolver import NameResolver
from .parse_errors import ParseError, ParseErrorKind
from .pc_header import PcHeader
from .symbol_table import SymbolTable

logger: Final[logging.Logger] = logging.getLogger(__name__)

CHUNKS_PER_WORKER: Final[int] = 4


class GoSymParser:
    """Go Symbol Parser.

    Locates the PcLineTable in a buffer, decodes its header and resolves the symbol of every function it describes.
    """

    def __init__(self, options: ParseOptions | None = None) -> None:
        """Initialize a new GoSymParser.

        Args:
            options: The parsing options, defaults are used when omitted.
        """
        self._options: Final[ParseOptions] = options if options is not None else ParseOptions()
        self._state: ParseState = ParseState.UNSTARTED
        self._failure: ParseErrorKind | None = None
        self._header: PcHeader | None = None

    @property
    def options(self) -> ParseOptions:
        """Returns the parsing options."""
        return self._options

    @property
    def state(self) -> ParseState:
        """Returns the step reached by the last parse."""
        return self._state

    @property
    def failure(self) -> ParseErrorKind | None:
        """Returns the kind of failure of the last parse (if any)."""
        return self._failure

    @property
    def header(self) -> PcHeader | None:
        """Returns the header decoded by the last parse (if any)."""
        return self._header

    def parse(self, data: bytes | bytearray | memoryview | Buffer) -> SymbolTable:
        """Extract the symbols of every function of the Go symbol table held by the data.

        Args:
            data: The bytes to parse, a section holding the PcLineTable or a whole binary.

        Raise:
            NotFoundError: No PcLineTable magic in the data.
            UnsupportedVersionError: The PcLineTable version isn't supported.
            TruncatedError: A read exceeds the data, carrying the symbols resolved before it.
            CorruptError: A consistency check failed, carrying the symbols resolved before it.

        Returns:
            The symbol table, partial when `allow_partial` is set and a failure interrupted the resolution.
        """
        self._state = ParseState.UNSTARTED
        self._failure = None
        self._header = None

        buffer: Final[Buffer] = data if isinstance(data, Buffer) else Buffer(data)

        try:
            anchor: Final[Anchor] = AnchorLocator.locate(buffer)
            self._state = ParseState.ANCHOR_FOUND
            logger.info(f"Localized {anchor.magic.name} PcLineTable at {anchor.offset:#0x} !")

            header: Final[PcHeader] = PcHeader.decode(buffer, anchor)
            self._header = header
            self._state = ParseState.HEADER_DECODED
        except ParseError as e:
            self._fail(e)
            raise

        self._state = ParseState.READING_FUNCTIONS
        reader: Final[FuncTableReader] = FuncTableReader(buffer, header)
        resolver: Final[NameResolver] = NameResolver(buffer, header, self._options.max_name_length)

        symbols: list[Symbol]
        error: ParseError | None
        if self._options.workers > 1 and header.nfunc > 1:
            symbols, error = self._resolve_parallel(reader, resolver)
        else:
            symbols, error = self._resolve_sequential(reader, resolver)

        if error is None:
            self._state = ParseState.COMPLETE
            logger.info(f"Resolved {len(symbols)} symbols.")
            return SymbolTable(symbols, header)

        partial: Final[SymbolTable] = SymbolTable(symbols, header, error)
        error.partial = partial
        self._fail(error)

        if self._options.allow_partial:
            logger.warning(f"Returning {len(partial)} of {header.nfunc} symbols: {error}")
            return partial
        raise error

    def _fail(self, error: ParseError) -> None:
        """Move the parse to the failed state.

        Args:
            error: The failure.
        """
        self._state = ParseState.FAILED
        self._failure = error.kind
        logger.debug(f"Parse failed ({error.kind}): {error}")

    @staticmethod
    def _resolve_sequential(
        reader: FuncTableReader, resolver: NameResolver
    ) -> tuple[list[Symbol], ParseError | None]:
        """Resolve the symbols one after the other, stopping at the first failure.

        Args:
            reader: The function descriptor reader.
            resolver: The name resolver.

        Returns:
            The symbols resolved before the first failure and the failure (if any).
        """
        symbols: Final[list[Symbol]] = []
        try:
            for index, descriptor in enumerate(reader):
                symbols.append(resolver.resolve(descriptor, index))
        except ParseError as e:
            return symbols, e
        return symbols, None

    def _resolve_parallel(
        self, reader: FuncTableReader, resolver: NameResolver
    ) -> tuple[list[Symbol], ParseError | None]:
        """Resolve the symbols on a thread pool over the shared buffer.

        Results are collected by function index, the first failing index bounds the resolved prefix.

        Args:
            reader: The function descriptor reader.
            resolver: The name resolver.

        Returns:
            The symbols resolved before the first failure and the failure (if any).
        """

        def resolve(index: int) -> Symbol | ParseError:
            try:
                return resolver.resolve(reader[index], index)
            except ParseError as e:
                return e

        workers: Final[int] = self._options.workers
        chunk_size: Final[int] = max(1, len(reader) // (workers * CHUNKS_PER_WORKER))
        logger.debug(f"Resolving {len(reader)} symbols on {workers} workers ...")

        with ThreadPool(workers) as pool:
            results: Final[list[Symbol | ParseError]] = pool.map(resolve, range(len(reader)), chunksize=chunk_size)

        symbols: Final[list[Symbol]] = []
        for result in results:
            if isinstance(result, ParseError):
                return symbols, result
            symbols.append(result)
        return symbols, None


def extract_symbols(data: bytes | bytearray | memoryview | Buffer, options: ParseOptions | None = None) -> SymbolTable:
    """Extract the function symbols of the Go symbol table held by the data.

    Args:
        data: The bytes to parse, a section holding the PcLineTable or a whole binary.
        options: The parsing options, defaults are used when omitted.

    Returns:
        The symbol table.
    """
    return GoSymParser(options).parse(data)
