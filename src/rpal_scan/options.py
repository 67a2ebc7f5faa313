"""
Scanner Options
===============

Configuration for a Scanner. Options come from:
- Default values (defined here), which reproduce the historical behavior
  of silently dropping malformed input
- Explicit keyword arguments
- Environment variables, via ScannerOptions.from_env()

Environment variables (all optional):
    RPAL_SCAN_STRICT: "1"/"true"/"yes" raises on every malformed input
    RPAL_SCAN_IO_ERRORS: "raise" or "eof"
    RPAL_SCAN_ENCODING: text encoding used when opening files
"""

from dataclasses import dataclass
from enum import Enum
import codecs
import os


class StringPolicy(Enum):
    """What to do when input ends inside a string literal."""
    DISCARD = "discard"     # drop the fragment, no token
    RAISE = "raise"         # raise UnterminatedStringError


class CharacterPolicy(Enum):
    """What to do with a character that belongs to no class."""
    DROP = "drop"           # no token for that character
    RAISE = "raise"         # raise InvalidCharacterError


class IOErrorPolicy(Enum):
    """What to do when the underlying stream fails to read."""
    RAISE = "raise"         # raise SourceReadError
    END_OF_INPUT = "eof"    # log it and behave as if input ended


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ScannerOptions:
    """
    Policies controlling how the scanner treats malformed input.

    Attributes:
        unterminated_string: Policy for a string cut off by end of input
        unknown_character: Policy for characters outside the alphabet
        io_errors: Policy for read failures of the underlying stream
        encoding: Encoding used by Scanner.from_file()
    """
    unterminated_string: StringPolicy = StringPolicy.DISCARD
    unknown_character: CharacterPolicy = CharacterPolicy.DROP
    io_errors: IOErrorPolicy = IOErrorPolicy.RAISE
    encoding: str = "utf-8"

    @classmethod
    def strict(cls, encoding: str = "utf-8") -> "ScannerOptions":
        """Options that raise on every kind of malformed input."""
        return cls(
            unterminated_string=StringPolicy.RAISE,
            unknown_character=CharacterPolicy.RAISE,
            io_errors=IOErrorPolicy.RAISE,
            encoding=encoding,
        )

    @classmethod
    def from_env(cls, environ=None) -> "ScannerOptions":
        """
        Create ScannerOptions from environment variables.

        Unrecognised values are ignored and the default kept.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Returns:
            ScannerOptions with values from the environment
        """
        env = os.environ if environ is None else environ
        options = cls()

        if env.get("RPAL_SCAN_STRICT", "").strip().lower() in _TRUE_VALUES:
            options.unterminated_string = StringPolicy.RAISE
            options.unknown_character = CharacterPolicy.RAISE

        if io_errors := env.get("RPAL_SCAN_IO_ERRORS"):
            try:
                options.io_errors = IOErrorPolicy(io_errors.strip().lower())
            except ValueError:
                pass

        if encoding := env.get("RPAL_SCAN_ENCODING"):
            try:
                codecs.lookup(encoding)
            except LookupError:
                pass
            else:
                options.encoding = encoding

        return options
