"""Allow the parsing of C-like Null terminated strings with a bounded scan."""

from typing import Final

from .buffer import Buffer
from .parse_errors import CorruptError, TruncatedError


class Cstr:
    """Allow the parsing of C-like Null terminated strings with a bounded scan."""

    def __init__(self, buffer: Buffer, offset: int, max_length: int) -> None:
        """Parses a new C string.

        At most `max_length + 1` bytes are scanned for the terminator.

        Args:
            buffer: The buffer to read the string from.
            offset: The offset of the first character of the string.
            max_length: The maximum length of the string, terminator excluded.

        Raise:
            TruncatedError: The buffer ends before the terminator and before `max_length` is exceeded.
            CorruptError: No terminator within `max_length` bytes.
        """
        if not buffer.contains(offset, 1):
            msg = "String starts outside of the buffer"
            raise TruncatedError(msg, offset=offset)

        scan_end: Final[int] = offset + max_length + 1
        end: Final[int] = buffer.data.find(b"\x00", offset, scan_end)
        if end == -1:
            if scan_end <= len(buffer):
                msg = f"String isn't terminated within {max_length:#x} bytes"
                raise CorruptError(msg, offset=offset)
            msg = "String isn't terminated before the end of the buffer"
            raise TruncatedError(msg, offset=offset)

        self._raw: Final[bytes] = buffer.data[offset:end]
        self._string: Final[str] = self._raw.decode("utf-8", errors="replace")

    def __len__(self) -> int:
        """Returns the length of the string in bytes."""
        return len(self._raw)

    def __str__(self) -> str:
        """String representation."""
        return self._string

    def __repr__(self) -> str:
        """Cstr representation."""
        return f'"{self._string}"'
