"""
rpal-scan - Lexical Scanner for RPAL
====================================

This package converts RPAL source text into a linear stream of classified
tokens for a downstream parser. It does not parse, build syntax trees or
evaluate anything.

Main Components
---------------
- **scanner**: the Scanner and its pull protocol (has_more_input/next_token)
- **tokens**: TokenKind and the immutable Token record
- **charclass**: the alphabet partition used to classify characters
- **source**: CharacterSource, single-character reads from a stream
- **options**: ScannerOptions and the malformed-input policies

Quick Start
-----------
    >>> from rpal_scan import tokenize
    >>> [t.text for t in tokenize("f (x) = x + 1", skip_deleted=True)]
    ['f', '(', 'x', ')', '=', 'x', '+', '1']

Or use the command-line tool:
    $ rpscan program.rpal
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from rpal_scan.charclass import CharClass, classify
from rpal_scan.errors import (
    RpalScanError,
    ScanError,
    SourceLocation,
    UnterminatedStringError,
    InvalidCharacterError,
    SourceReadError,
)
from rpal_scan.options import (
    ScannerOptions,
    StringPolicy,
    CharacterPolicy,
    IOErrorPolicy,
)
from rpal_scan.scanner import Scanner, tokenize, scan_file
from rpal_scan.source import CharacterSource
from rpal_scan.tokens import Token, TokenKind

__all__ = [
    # Version info
    "__version__",
    # Scanner
    "Scanner",
    "tokenize",
    "scan_file",
    "CharacterSource",
    # Tokens
    "Token",
    "TokenKind",
    # Character classes
    "CharClass",
    "classify",
    # Options
    "ScannerOptions",
    "StringPolicy",
    "CharacterPolicy",
    "IOErrorPolicy",
    # Exception hierarchy
    "RpalScanError",
    "ScanError",
    "SourceLocation",
    "UnterminatedStringError",
    "InvalidCharacterError",
    "SourceReadError",
]
