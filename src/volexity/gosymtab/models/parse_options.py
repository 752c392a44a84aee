"""Options of the Go symbol table parsing."""

from dataclasses import dataclass
from typing import Final

DEFAULT_MAX_NAME_LENGTH: Final[int] = 4096


@dataclass(frozen=True)
class ParseOptions:
    """Options of the Go symbol table parsing.

    Attributes:
        max_name_length: Maximum length of a function name, bounding the terminator scan on malformed input.
        allow_partial: Return the symbols resolved before a failure instead of raising it.
        workers: Number of threads resolving the symbols, 1 resolves them sequentially.
    """

    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
    allow_partial: bool = False
    workers: int = 1

    def __post_init__(self) -> None:
        """Validate the options."""
        if self.max_name_length < 1:
            msg = f"Invalid maximum name length {self.max_name_length}"
            raise ValueError(msg)
        if self.workers < 1:
            msg = f"Invalid worker count {self.workers}"
            raise ValueError(msg)
