"""Signatures allow the matching of Yara strings on arbitrary data."""

from typing import Final

import yara


class Signature:
    """Signatures allow the matching of Yara strings on arbitrary data."""

    def __init__(self, name: str, *signatures: str) -> None:
        """Initialize a new signature.

        Args:
            name: The name of the compiled rule.
            signatures: The Yara hex strings, any of which matching is a match of the signature.
        """
        strings: Final[str] = " ".join(f"${name}{i} = {signature}" for i, signature in enumerate(signatures))
        sig: Final[str] = f"rule {name} {{ strings: {strings} condition: any of them }}"
        self._rule: Final[yara.Rules] = yara.compile(source=sig)

    def match(self, bin_data: bytes) -> list[tuple[int, bytes]]:
        """Match the signature against binary data.

        Args:
            bin_data: The data to match the signature on.

        Returns:
            The list of (offset, data) pairs for each matches, ordered by offset.
        """
        matches: Final[list] = self._rule.match(data=bin_data)
        return sorted(
            (instance.offset, instance.matched_data)
            for match in matches
            for string in match.strings
            for instance in string.instances
        )


# Any pcHeader-like prefix: 0xFFFFFFF? magic, zeroed pads, quantum and pointer size.
GO_LIKE_HEADER_SIG: Final[Signature] = Signature(
    "pcheader",
    "{ F? FF FF FF 00 00 (01 | 02 | 04) (04 | 08) }",
    "{ FF FF FF F? 00 00 (01 | 02 | 04) (04 | 08) }",
)
