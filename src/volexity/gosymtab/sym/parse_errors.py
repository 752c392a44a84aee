"""Typed failures raised while parsing the Go symbol table."""

from enum import StrEnum, auto
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .symbol_table import SymbolTable


class ParseErrorKind(StrEnum):
    """Enumeration of the different kinds of parse failures."""

    NOT_FOUND = auto()
    TRUNCATED = auto()
    CORRUPT = auto()
    UNSUPPORTED_VERSION = auto()


class ParseError(ValueError):
    """Base exception raised whenever the Go symbol table can't be parsed."""

    kind: ParseErrorKind

    def __init__(self, message: str = "", *, offset: int | None = None, index: int | None = None) -> None:
        """Initialize a new ParseError instance.

        Args:
            message: The exception's error message.
            offset: The buffer offset at which the failure occured (if known).
            index: The function slot being resolved when the failure occured (if any).
        """
        super().__init__(message)
        self.message: Final[str] = message
        self.offset: int | None = offset
        self.index: int | None = index
        self.partial: SymbolTable | None = None

    def __str__(self) -> str:
        """Returns the exception's error message.

        Returns: The exception's error message.
        """
        if self.offset is not None:
            return f"{self.message} (at {self.offset:#0x})"
        return self.message


class NotFoundError(ParseError):
    """No recognized magic signature in the buffer."""

    kind = ParseErrorKind.NOT_FOUND


class TruncatedError(ParseError):
    """A read would exceed the buffer bounds."""

    kind = ParseErrorKind.TRUNCATED


class CorruptError(ParseError):
    """An internal consistency check failed."""

    kind = ParseErrorKind.CORRUPT


class UnsupportedVersionError(ParseError):
    """The magic looks like a Go table but no known layout is mapped to it."""

    kind = ParseErrorKind.UNSUPPORTED_VERSION
