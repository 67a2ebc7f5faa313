"""
Character Classification
========================

Partitions the RPAL alphabet into disjoint character classes. The scanner
classifies the first character of every token with classify() and then
extends the token with the per-class membership tests below.

Classes and members
-------------------
| Class       | Members                                           |
|-------------|---------------------------------------------------|
| LETTER      | a-z A-Z                                           |
| DIGIT       | 0-9                                               |
| OPERATOR    | see OPERATOR_SYMBOLS below                        |
| QUOTE       | '                                                 |
| SPACE       | space, tab, newline, CR, form feed, vertical tab  |
| PUNCTUATION | ( ) ; ,                                           |
| OTHER       | everything else, including non-ASCII              |

The underscore is an operator symbol when it starts a token but
continues an identifier once one has begun.
"""

from enum import Enum, auto
import string


class CharClass(Enum):
    """Class of a single source character."""

    LETTER = auto()
    DIGIT = auto()
    OPERATOR = auto()
    QUOTE = auto()
    SPACE = auto()
    PUNCTUATION = auto()
    OTHER = auto()


LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
OPERATOR_SYMBOLS = frozenset('+-/~:=|!#%_{}"*<>.&$^[]?@')
QUOTE = "'"
SPACES = frozenset(" \t\n\r\f\v")
PUNCTUATION = frozenset("();,")
IDENTIFIER_CHARS = LETTERS | DIGITS | {"_"}

COMMENT_START = "/"
ESCAPE = "\\"


def _build_table() -> dict[str, CharClass]:
    # Later assignments must not override earlier ones, so the table is
    # filled in classification priority order.
    table: dict[str, CharClass] = {}
    for members, char_class in (
        (LETTERS, CharClass.LETTER),
        (DIGITS, CharClass.DIGIT),
        (OPERATOR_SYMBOLS, CharClass.OPERATOR),
        (QUOTE, CharClass.QUOTE),
        (SPACES, CharClass.SPACE),
        (PUNCTUATION, CharClass.PUNCTUATION),
    ):
        for char in members:
            table.setdefault(char, char_class)
    return table


_CLASS_TABLE = _build_table()


def classify(char: str) -> CharClass:
    """
    Return the class of a single character.

    Args:
        char: A one-character string

    Returns:
        The CharClass the character belongs to, OTHER if none
    """
    return _CLASS_TABLE.get(char, CharClass.OTHER)


def is_identifier_char(char: str) -> bool:
    """True if char may continue an identifier."""
    return char in IDENTIFIER_CHARS


def is_digit(char: str) -> bool:
    return char in DIGITS


def is_operator_symbol(char: str) -> bool:
    return char in OPERATOR_SYMBOLS


def is_space(char: str) -> bool:
    return char in SPACES
