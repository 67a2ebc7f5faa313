"""
RPAL Token Types
================

Token kinds and the immutable Token record produced by the scanner.

Whitespace and comments are not skipped by the scanner: they come out as
DELETE tokens so that a consumer can see the whole source, and the parser
filters them before building syntax.
"""

from dataclasses import dataclass
from enum import Enum, auto

from rpal_scan.errors import SourceLocation


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Lexical categories of RPAL source.

    RESERVED exists for the parser's benefit. Keywords such as ``let`` and
    ``in`` are scanned as IDENTIFIER; the scanner never emits RESERVED.
    """

    IDENTIFIER = auto()     # letter (letter | digit | _)*
    INTEGER = auto()        # digit+
    STRING = auto()         # '...' with the quotes stripped
    OPERATOR = auto()       # maximal run of operator symbols
    DELETE = auto()         # whitespace run or // comment
    L_PAREN = auto()        # (
    R_PAREN = auto()        # )
    SEMICOLON = auto()      # ;
    COMMA = auto()          # ,
    RESERVED = auto()       # never produced by the scanner


# Single-character punctuation and the kind each one yields
PUNCTUATION_KINDS: dict[str, TokenKind] = {
    "(": TokenKind.L_PAREN,
    ")": TokenKind.R_PAREN,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexeme.

    Attributes:
        kind: The TokenKind classification
        text: The exact lexeme (string contents without quotes for STRING)
        line: Line on which the first character was read (1-indexed)
        filename: Name of the source, for diagnostics
    """
    kind: TokenKind
    text: str
    line: int
    filename: str = "<input>"

    def __str__(self) -> str:
        """Render the token the way the rpscan driver prints it."""
        return f"Token[type={self.kind.name}, value='{self.text}', line={self.line}]"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, line {self.line})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line)

    @property
    def is_deleted(self) -> bool:
        """True for whitespace and comment tokens the parser discards."""
        return self.kind is TokenKind.DELETE

    def to_dict(self) -> dict:
        """Plain-data form used by ``rpscan --format json``."""
        return {"type": self.kind.name, "value": self.text, "line": self.line}
