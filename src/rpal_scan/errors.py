"""
RPAL Scanner Error Hierarchy
============================

This module defines the exception hierarchy for the scanner. All
exceptions inherit from RpalScanError, allowing callers to catch every
scanner-related error with a single except clause if desired.

Exception Hierarchy
-------------------
RpalScanError (base)
└── ScanError - problems found while scanning source text
    ├── UnterminatedStringError - missing closing quote (strict mode only)
    ├── InvalidCharacterError - character outside the alphabet (strict mode only)
    └── SourceReadError - the underlying stream failed to read

Running out of input is never an error: the scanner signals it by
returning None from next_token().

Error messages follow this format:
    filename:line: error: description
        source_text
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class RpalScanError(Exception):
    """
    Base exception for all scanner errors.

        try:
            tokens = scan_file("program.rpal")
        except RpalScanError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in source text for error reporting.

    The scanner tracks lines only; tokens carry no column.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"


# =============================================================================
# Scanner Exceptions
# =============================================================================

class ScanError(RpalScanError):
    """
    Base exception for errors detected while scanning.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_text: The offending source fragment (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_text: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_text = source_text
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source fragment, and hint.

        Example output:
            prog.rpal:3: error: unterminated string literal
                'hello
            hint: add a closing ' to complete the string
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_text:
            parts.append(f"    {self.source_text}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnterminatedStringError(ScanError):
    """
    String literal with no closing quote before end of input.

    Only raised under StringPolicy.RAISE; the default policy discards
    the fragment silently.

    Example:
        let s = 'hello
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_text: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add a closing ' to complete the string",
            source_text=source_text,
        )


class InvalidCharacterError(ScanError):
    """
    Character that belongs to no character class.

    Only raised under CharacterPolicy.RAISE; the default policy drops
    the character.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character {char!r} (U+{ord(char):04X})",
            location=location,
        )


class SourceReadError(ScanError):
    """
    The underlying stream failed while reading.

    Raised under IOErrorPolicy.RAISE. Under IOErrorPolicy.END_OF_INPUT
    the failure is logged and treated exactly like end of input.
    """

    def __init__(
        self,
        filename: str,
        cause: BaseException,
        line: Optional[int] = None,
    ):
        self.filename = filename
        self.cause = cause
        location = SourceLocation(filename, line) if line is not None else None
        super().__init__(
            f"cannot read '{filename}': {cause}",
            location=location,
        )
