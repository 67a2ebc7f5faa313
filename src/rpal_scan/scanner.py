"""
RPAL Scanner
============

This module implements the scanner (lexer) for RPAL source. It turns a
stream of characters into a stream of Token values for the parser.

Token Categories
----------------
- Identifiers: letter followed by letters, digits, underscores
- Integers: runs of decimal digits, kept as raw text
- Operators: maximal runs of operator symbols, e.g. ``<>=`` or ``->``
- Strings: 'single quoted', quotes stripped, no escape decoding
- Punctuation: ( ) ; , each as its own token
- Delete: whitespace runs and // comments, left for the consumer to drop

Protocol
--------
The scanner is pull-based. A consumer calls has_more_input() and
next_token() in a loop; next_token() may return None for a call that
consumed only discarded input, so the loop must tolerate it. tokens()
runs that loop for you.

At most one character of lookahead is ever buffered. Newlines are
counted when a character is taken into a token, so a character still
sitting in the lookahead slot has not advanced the line counter yet.

Example Usage
-------------
>>> from rpal_scan import Scanner
>>> scanner = Scanner.from_string("let x = 'hi' in x")
>>> for token in scanner.tokens(skip_deleted=True):
...     print(token)
Token[type=IDENTIFIER, value='let', line=1]
Token[type=IDENTIFIER, value='x', line=1]
Token[type=OPERATOR, value='=', line=1]
Token[type=STRING, value='hi', line=1]
Token[type=IDENTIFIER, value='in', line=1]
Token[type=IDENTIFIER, value='x', line=1]
"""

from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Optional, TextIO, Union
import codecs
import io
import logging

from rpal_scan.charclass import (
    COMMENT_START,
    ESCAPE,
    QUOTE,
    CharClass,
    classify,
    is_digit,
    is_identifier_char,
    is_operator_symbol,
    is_space,
)
from rpal_scan.errors import (
    InvalidCharacterError,
    SourceLocation,
    UnterminatedStringError,
)
from rpal_scan.options import CharacterPolicy, ScannerOptions, StringPolicy
from rpal_scan.source import CharacterSource
from rpal_scan.tokens import PUNCTUATION_KINDS, Token, TokenKind

# Logger for this module
logger = logging.getLogger(__name__)

# Longest string fragment quoted in an unterminated-string error
_FRAGMENT_LIMIT = 40


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes RPAL source read from a text or binary stream.

    The scanner owns its stream and closes it as soon as end of input is
    seen. Malformed input is handled according to ScannerOptions; by
    default an unterminated string and an unknown character both vanish
    without a token.

    Usage:
        scanner = Scanner.from_file("prog.rpal")
        while scanner.has_more_input():
            token = scanner.next_token()
            if token is not None:
                ...

    Attributes:
        filename: Name of the source (for tokens and error messages)
        options: The ScannerOptions in effect
    """

    def __init__(
        self,
        stream: Union[TextIO, BinaryIO],
        filename: str = "<input>",
        options: Optional[ScannerOptions] = None,
        encoding: Optional[str] = None,
    ):
        """
        Initialize the scanner over an open stream.

        Args:
            stream: Stream to read; the scanner takes ownership
            filename: Name of the source, used in tokens and diagnostics
            options: Malformed-input policies (defaults preserve silent drops)
            encoding: Decode a binary stream with this encoding; None for text
        """
        self.filename = filename
        self.options = options or ScannerOptions()
        self._source = CharacterSource(
            stream, filename, self.options.io_errors, encoding
        )

        # One-character lookahead slot, filled by _peek()
        self._lookahead: Optional[str] = None
        self._line = 1

        self._builders: dict[CharClass, Callable[[str, int], Optional[Token]]] = {
            CharClass.LETTER: self._scan_identifier,
            CharClass.DIGIT: self._scan_integer,
            CharClass.OPERATOR: self._scan_operator,
            CharClass.QUOTE: self._scan_string,
            CharClass.SPACE: self._scan_space,
            CharClass.PUNCTUATION: self._scan_punctuation,
            CharClass.OTHER: self._drop_unknown,
        }

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        options: Optional[ScannerOptions] = None,
    ) -> "Scanner":
        """
        Open a source file and return a scanner over it.

        The file is read as bytes and decoded one character at a time, so
        a decoding error is reported at the character where it occurs and
        line endings reach the scanner untranslated, exactly as they would
        from from_string().

        Raises:
            LookupError: If the encoding is unknown
            OSError: If the file cannot be opened
        """
        options = options or ScannerOptions()
        codecs.lookup(options.encoding)
        path = Path(path)
        logger.debug(f"Scanning {path} (encoding {options.encoding})")
        stream = open(path, "rb")
        return cls(stream, str(path), options, encoding=options.encoding)

    @classmethod
    def from_string(
        cls,
        text: str,
        filename: str = "<input>",
        options: Optional[ScannerOptions] = None,
    ) -> "Scanner":
        """Return a scanner over an in-memory string."""
        return cls(io.StringIO(text), filename, options)

    # =========================================================================
    # Public Protocol
    # =========================================================================

    @property
    def line(self) -> int:
        """Current line number (1-indexed)."""
        return self._line

    def has_more_input(self) -> bool:
        """
        Return True while a lookahead character is pending or the source
        has not reported end of input.

        This is a hint only: the next call to next_token() may still
        return None.
        """
        return self._lookahead is not None or not self._source.exhausted

    def next_token(self) -> Optional[Token]:
        """
        Scan and return the next token.

        Returns:
            The next Token, or None if input is exhausted or this call
            consumed only discarded input

        Raises:
            UnterminatedStringError: Under StringPolicy.RAISE
            InvalidCharacterError: Under CharacterPolicy.RAISE
            SourceReadError: Under IOErrorPolicy.RAISE
        """
        start_line = self._line
        char = self._advance()
        if char is None:
            return None
        return self._builders[classify(char)](char, start_line)

    def tokens(self, skip_deleted: bool = False) -> Iterator[Token]:
        """
        Generate every remaining token.

        Args:
            skip_deleted: Drop whitespace and comment tokens

        Yields:
            Token objects in source order
        """
        while self.has_more_input():
            token = self.next_token()
            if token is None:
                continue
            if skip_deleted and token.is_deleted:
                continue
            yield token

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def close(self) -> None:
        """Release the source early; further calls see end of input."""
        self._lookahead = None
        self._source.close()

    def __enter__(self) -> "Scanner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _peek(self) -> Optional[str]:
        """Return the lookahead character, reading one if the slot is empty."""
        if self._lookahead is None:
            self._lookahead = self._source.read(self._line)
        return self._lookahead

    def _advance(self) -> Optional[str]:
        """Consume and return the lookahead character, counting newlines."""
        char = self._peek()
        self._lookahead = None
        if char == "\n":
            self._line += 1
        return char

    def _take_while(self, predicate: Callable[[str], bool], chars: list[str]) -> None:
        """Append characters to chars while they satisfy predicate."""
        while (char := self._peek()) is not None and predicate(char):
            chars.append(self._advance())

    def _make_token(self, kind: TokenKind, chars: list[str], line: int) -> Token:
        return Token(kind, "".join(chars), line, self.filename)

    # =========================================================================
    # Token Builders
    # =========================================================================

    def _scan_identifier(self, first: str, line: int) -> Token:
        """Scan an identifier: letter (letter | digit | _)*."""
        chars = [first]
        self._take_while(is_identifier_char, chars)
        return self._make_token(TokenKind.IDENTIFIER, chars, line)

    def _scan_integer(self, first: str, line: int) -> Token:
        """Scan an integer: digit+. No sign and no range check."""
        chars = [first]
        self._take_while(is_digit, chars)
        return self._make_token(TokenKind.INTEGER, chars, line)

    def _scan_operator(self, first: str, line: int) -> Token:
        """
        Scan a maximal run of operator symbols.

        A run whose first two characters are // is a comment instead.
        Splitting a run such as ``<>=`` into primitive operators is left
        to the parser.
        """
        if first == COMMENT_START and self._peek() == COMMENT_START:
            self._advance()
            return self._scan_comment(line)

        chars = [first]
        self._take_while(is_operator_symbol, chars)
        return self._make_token(TokenKind.OPERATOR, chars, line)

    def _scan_comment(self, line: int) -> Token:
        """
        Scan the rest of a // comment.

        The terminating newline is consumed (and counted) but is not part
        of the lexeme and is not left in the lookahead slot.
        """
        chars = [COMMENT_START, COMMENT_START]
        while True:
            char = self._advance()
            if char is None or char == "\n":
                break
            chars.append(char)
        return self._make_token(TokenKind.DELETE, chars, line)

    def _scan_string(self, first: str, line: int) -> Optional[Token]:
        """
        Scan a single-quoted string literal.

        Returns the contents without the quotes. A backslash keeps the
        following character in the string, so \\' does not close it; the
        text is returned raw, escapes are not decoded.
        """
        chars: list[str] = []
        while True:
            char = self._advance()
            if char is None:
                return self._unterminated_string(chars, line)
            if char == QUOTE:
                return self._make_token(TokenKind.STRING, chars, line)
            chars.append(char)
            if char == ESCAPE:
                escaped = self._advance()
                if escaped is None:
                    return self._unterminated_string(chars, line)
                chars.append(escaped)

    def _scan_space(self, first: str, line: int) -> Token:
        """Scan a whitespace run into a DELETE token."""
        chars = [first]
        self._take_while(is_space, chars)
        return self._make_token(TokenKind.DELETE, chars, line)

    def _scan_punctuation(self, first: str, line: int) -> Token:
        """Punctuation is always a single-character token."""
        return Token(PUNCTUATION_KINDS[first], first, line, self.filename)

    # =========================================================================
    # Malformed Input
    # =========================================================================

    def _unterminated_string(self, chars: list[str], line: int) -> None:
        """Discard or report a string cut off by end of input."""
        fragment = QUOTE + "".join(chars)[:_FRAGMENT_LIMIT]
        if self.options.unterminated_string is StringPolicy.RAISE:
            raise UnterminatedStringError(
                SourceLocation(self.filename, line),
                fragment,
            )
        logger.debug(f"{self.filename}:{line}: discarding unterminated string {fragment!r}")
        return None

    def _drop_unknown(self, char: str, line: int) -> None:
        """Drop or report a character outside the alphabet."""
        if self.options.unknown_character is CharacterPolicy.RAISE:
            raise InvalidCharacterError(char, SourceLocation(self.filename, line))
        logger.debug(f"{self.filename}:{line}: dropping character {char!r}")
        return None


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    text: str,
    filename: str = "<input>",
    options: Optional[ScannerOptions] = None,
    skip_deleted: bool = False,
) -> list[Token]:
    """
    Scan a string and return all of its tokens.

    Args:
        text: RPAL source text
        filename: Name used in tokens and diagnostics
        options: Malformed-input policies
        skip_deleted: Drop whitespace and comment tokens

    Returns:
        List of tokens in source order
    """
    with Scanner.from_string(text, filename, options) as scanner:
        return list(scanner.tokens(skip_deleted=skip_deleted))


def scan_file(
    path: Union[str, Path],
    options: Optional[ScannerOptions] = None,
    skip_deleted: bool = False,
) -> list[Token]:
    """Scan a source file and return all of its tokens."""
    with Scanner.from_file(path, options) as scanner:
        return list(scanner.tokens(skip_deleted=skip_deleted))
