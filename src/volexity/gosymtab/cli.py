"""Implements the gosymtab command line interface."""

import sys
from logging import INFO, WARNING, Logger, basicConfig, getLogger
from typing import Final

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers.web import JsonLexer

from .models.cli_arguments import CLIArguments
from .models.symbol_report import SymbolReport
from .sym.binary import Binary
from .sym.go_sym_parser import GoSymParser
from .sym.parse_errors import NotFoundError, ParseError
from .sym.symbol_table import SymbolTable

basicConfig()
getLogger(__name__.rsplit(".", 1)[0]).setLevel(INFO)

logger: Final[Logger] = getLogger(__name__)


def extract_from_binary(binary: Binary, parser: GoSymParser) -> tuple[str, SymbolTable]:
    """Extract the symbols from the first candidate range of the binary holding a valid PcLineTable.

    A candidate whose header can't be decoded is skipped. Once a header is decoded, the table is the one reported.

    Args:
        binary: The binary to extract the symbols from.
        parser: The parser to use.

    Raise:
        ParseError: No candidate holds a valid PcLineTable header, or the first valid table fails to resolve.

    Returns:
        The name of the range the table was found in and the symbol table.
    """
    not_found: NotFoundError | None = None
    invalid: ParseError | None = None
    for source, buffer in binary.pclntab_candidates():
        logger.info(f'Searching for the PcLineTable in "{source}" ...')
        try:
            return source, parser.parse(buffer)
        except NotFoundError as e:
            logger.debug(f'No PcLineTable in "{source}": {e}')
            not_found = not_found or e
        except ParseError as e:
            if parser.header is not None:
                raise
            logger.error(f'PcLineTable candidate in "{source}" is invalid ({e.kind}): {e}')  # noqa: TRY400
            invalid = invalid or e
    if invalid is not None:
        raise invalid
    if not_found is not None:
        raise not_found
    msg = f"No data to scan in {binary.name}"
    raise NotFoundError(msg)


def run_cli(argv: list[str] | None = None) -> int:
    """Implements the gosymtab command line interface.

    Args:
        argv: Raw CLI arguments, defaults to `sys.argv`.

    Returns:
        The process exit status.
    """
    args: Final[CLIArguments] = CLIArguments(argv if argv is not None else sys.argv)
    if args.quiet:
        getLogger(__name__.rsplit(".", 1)[0]).setLevel(WARNING)

    sample_bin: Final[Binary] = Binary(args.sample_path, raw=args.raw)
    parser: Final[GoSymParser] = GoSymParser(args.options)

    # STEP 1: Extract embeded symbols
    try:
        source, symbol_table = extract_from_binary(sample_bin, parser)
    except ParseError as e:
        logger.error(f"Unable to extract symbols from {sample_bin.name} ({e.kind}): {e}")  # noqa: TRY400
        return 1

    # STEP 2: Generate the final JSON report.
    report_json: Final[str] = SymbolReport(sample_bin.name, sample_bin.data, symbol_table, source).to_json(pretty=True)

    # STEP 2.1: Print colorized report to the terminal.
    if not args.quiet:
        report_colorized: Final[str] = highlight(report_json, JsonLexer(), TerminalFormatter())
        print(f"Report: {report_colorized}")  # noqa: T201

    # STEP 2.2: If required, then write report to disk.
    if args.output:
        with args.output.open("w") as output_file:
            output_file.write(report_json)
        logger.info(f"Report written to {args.output}")
    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run_cli())
