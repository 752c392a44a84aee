"""Enumeration of the steps of a symbol table parse."""

from enum import StrEnum, auto


class ParseState(StrEnum):
    """Enumeration of the steps of a symbol table parse.

    UNSTARTED -> ANCHOR_FOUND -> HEADER_DECODED -> READING_FUNCTIONS -> COMPLETE, FAILED being reachable from any step.
    """

    UNSTARTED = auto()
    ANCHOR_FOUND = auto()
    HEADER_DECODED = auto()
    READING_FUNCTIONS = auto()
    COMPLETE = auto()
    FAILED = auto()
