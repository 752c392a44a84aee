"""CLI Arguments data model."""

# Builtins.
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Final

from .parse_options import DEFAULT_MAX_NAME_LENGTH, ParseOptions


class CLIArguments:
    """CLI Arguments data model."""

    def __init__(self, argv: list[str]) -> None:
        """Initialize a new instance of the CLI Arguments data model.

        Args:
            argv: Raw CLI arguments.
        """
        parser: Final[ArgumentParser] = ArgumentParser(prog=Path(argv[0]).name)

        parser.add_argument("sample_path", help="Path to the stripped GO sample to analyze.")
        parser.add_argument("-o", "--output", help="Path of the output JSON report.")
        parser.add_argument("-q", "--quiet", action="store_true", help="Reduce the amount of logs.")
        parser.add_argument(
            "-p", "--allow-partial", action="store_true", help="Report the symbols resolved before a failure."
        )
        parser.add_argument(
            "-m",
            "--max-name-length",
            type=int,
            default=DEFAULT_MAX_NAME_LENGTH,
            help="Maximum length of a function name.",
        )
        parser.add_argument("-w", "--workers", type=int, default=1, help="Number of threads resolving the symbols.")
        parser.add_argument(
            "--raw", action="store_true", help="Scan the whole file without parsing its executable format."
        )

        if len(argv) <= 1:
            parser.print_usage()
            sys.exit()

        parsed_args: Final[Namespace] = parser.parse_args(argv[1:])

        self._sample_path: Final[Path] = Path(parsed_args.sample_path).resolve()
        self._output: Final[Path | None] = Path(parsed_args.output).resolve() if parsed_args.output else None
        self._quiet: Final[bool] = parsed_args.quiet
        self._raw: Final[bool] = parsed_args.raw

        try:
            self._options: Final[ParseOptions] = ParseOptions(
                max_name_length=parsed_args.max_name_length,
                allow_partial=parsed_args.allow_partial,
                workers=parsed_args.workers,
            )
        except ValueError as e:
            parser.error(str(e))

    @property
    def sample_path(self) -> Path:
        """Returns the path to the GO sample to analyze.

        Returns:
            Path to the GO sample to analyze.
        """
        return self._sample_path

    @property
    def output(self) -> Path | None:
        """Returns the path of the output JSON report.

        Returns:
            The path of the output JSON report.
        """
        return self._output

    @property
    def quiet(self) -> bool:
        """Returns whethere to reduce logging.

        Returns:
            Whether to reduce logging.
        """
        return self._quiet

    @property
    def raw(self) -> bool:
        """Returns whether to scan the whole file without parsing its executable format.

        Returns:
            Whether to skip the executable format parsing.
        """
        return self._raw

    @property
    def options(self) -> ParseOptions:
        """Returns the symbol table parsing options.

        Returns:
            The parsing options.
        """
        return self._options
