# =============================================================================
# test_scanner.py - Scanner Unit Tests
# =============================================================================
# Tests for the RPAL scanner.
#
# Test coverage includes:
#   - Each token builder: identifier, integer, operator, comment, string,
#     whitespace, punctuation
#   - Line tracking and the one-character lookahead discipline
#   - The has_more_input/next_token pull protocol
#   - Malformed input under the default (silent) and strict policies
# =============================================================================

import io

import pytest
from rpal_scan.errors import InvalidCharacterError, UnterminatedStringError
from rpal_scan.options import CharacterPolicy, ScannerOptions, StringPolicy
from rpal_scan.scanner import Scanner, scan_file, tokenize
from rpal_scan.tokens import Token, TokenKind


# =============================================================================
# Helper Functions
# =============================================================================

def kinds_and_text(source: str, **kwargs) -> list:
    """Scan source and reduce each token to a (kind, text) pair."""
    return [(t.kind, t.text) for t in tokenize(source, **kwargs)]


def significant(source: str, **kwargs) -> list:
    """Tokens a parser would see, whitespace and comments removed."""
    return tokenize(source, skip_deleted=True, **kwargs)


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty input produces no tokens."""
        assert tokenize("") == []

    def test_letters_only(self):
        """A run of letters is one identifier on line 1."""
        tokens = tokenize("Hello")
        assert tokens == [Token(TokenKind.IDENTIFIER, "Hello", 1)]

    def test_identifier_number_and_space(self):
        """The canonical mixed example."""
        assert kinds_and_text("abc123 456") == [
            (TokenKind.IDENTIFIER, "abc123"),
            (TokenKind.DELETE, " "),
            (TokenKind.INTEGER, "456"),
        ]

    def test_identifier_with_underscore(self):
        """Underscore continues an identifier."""
        assert kinds_and_text("my_var_2") == [(TokenKind.IDENTIFIER, "my_var_2")]

    def test_identifier_case_preserved(self):
        tokens = tokenize("LeT")
        assert tokens[0].text == "LeT"

    def test_keywords_are_identifiers(self):
        """Reserved words are recognised downstream, not here."""
        tokens = significant("let x = 1 in x")
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].text == "let"
        assert tokens[4].kind == TokenKind.IDENTIFIER
        assert tokens[4].text == "in"
        assert all(t.kind != TokenKind.RESERVED for t in tokens)

    def test_integer(self):
        assert kinds_and_text("007") == [(TokenKind.INTEGER, "007")]

    def test_integer_followed_by_letters(self):
        """Digits stop at the first letter."""
        assert kinds_and_text("12ab") == [
            (TokenKind.INTEGER, "12"),
            (TokenKind.IDENTIFIER, "ab"),
        ]

    def test_no_sign_handling(self):
        """A minus sign is an operator, not part of the integer."""
        assert kinds_and_text("-5") == [
            (TokenKind.OPERATOR, "-"),
            (TokenKind.INTEGER, "5"),
        ]

    def test_no_floating_point(self):
        assert kinds_and_text("3.14") == [
            (TokenKind.INTEGER, "3"),
            (TokenKind.OPERATOR, "."),
            (TokenKind.INTEGER, "14"),
        ]

    def test_large_integer_kept_as_text(self):
        digits = "9" * 50
        assert tokenize(digits)[0].text == digits


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:
    """Test greedy operator scanning."""

    def test_single_operator(self):
        assert kinds_and_text("+") == [(TokenKind.OPERATOR, "+")]

    def test_maximal_run(self):
        """A run of operator symbols is a single token."""
        assert kinds_and_text("<>=") == [(TokenKind.OPERATOR, "<>=")]

    def test_arrow(self):
        assert kinds_and_text("x->y") == [
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.OPERATOR, "->"),
            (TokenKind.IDENTIFIER, "y"),
        ]

    def test_leading_underscore_is_operator(self):
        """Underscore only continues identifiers, it cannot start one."""
        assert kinds_and_text("_a") == [
            (TokenKind.OPERATOR, "_"),
            (TokenKind.IDENTIFIER, "a"),
        ]

    def test_double_quote_is_operator(self):
        assert kinds_and_text('"') == [(TokenKind.OPERATOR, '"')]

    def test_single_slash(self):
        assert kinds_and_text("a/b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.OPERATOR, "/"),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_slash_at_end_of_input(self):
        """A lone trailing slash is an operator, not a comment."""
        assert kinds_and_text("/") == [(TokenKind.OPERATOR, "/")]

    def test_slash_run_not_starting_with_comment(self):
        """Only a run that begins with // is a comment."""
        assert kinds_and_text("+//") == [(TokenKind.OPERATOR, "+//")]

    def test_operator_stops_at_punctuation(self):
        assert kinds_and_text("**(") == [
            (TokenKind.OPERATOR, "**"),
            (TokenKind.L_PAREN, "("),
        ]


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test // comments, which come out as DELETE tokens."""

    def test_comment_then_identifier(self):
        tokens = tokenize("// comment\nx")
        assert tokens[0] == Token(TokenKind.DELETE, "// comment", 1)
        assert tokens[-1] == Token(TokenKind.IDENTIFIER, "x", 2)

    def test_newline_not_in_comment_or_pushed_back(self):
        """The terminating newline is consumed but produces no token."""
        assert kinds_and_text("// c\nx") == [
            (TokenKind.DELETE, "// c"),
            (TokenKind.IDENTIFIER, "x"),
        ]

    def test_comment_at_end_of_input(self):
        assert kinds_and_text("x // done") == [
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.DELETE, " "),
            (TokenKind.DELETE, "// done"),
        ]

    def test_comment_keeps_quotes_and_symbols(self):
        text = "// it's (a) 'test'; x+y"
        assert kinds_and_text(text) == [(TokenKind.DELETE, text)]

    def test_comment_only_slashes(self):
        assert kinds_and_text("//") == [(TokenKind.DELETE, "//")]

    def test_comment_skipped_for_parser(self):
        tokens = significant("a // b c\nd")
        assert [t.text for t in tokens] == ["a", "d"]


# =============================================================================
# String Literal Tests
# =============================================================================

class TestStringLiterals:
    """Test single-quoted string literals."""

    def test_simple_string(self):
        assert kinds_and_text("'hello'") == [(TokenKind.STRING, "hello")]

    def test_empty_string(self):
        """The only token whose text may be empty."""
        assert kinds_and_text("''") == [(TokenKind.STRING, "")]

    def test_string_with_spaces_and_symbols(self):
        assert tokenize("'a b; (c) + // d'")[0].text == "a b; (c) + // d"

    def test_string_spanning_lines(self):
        """Newlines are allowed in strings and still counted."""
        tokens = tokenize("'a\nb' c")
        assert tokens[0] == Token(TokenKind.STRING, "a\nb", 1)
        assert tokens[-1] == Token(TokenKind.IDENTIFIER, "c", 2)

    def test_escapes_kept_raw(self):
        """Escape sequences are not decoded."""
        assert tokenize(r"'a\tb\n'")[0].text == r"a\tb\n"

    def test_escaped_quote_does_not_terminate(self):
        assert kinds_and_text(r"'it\'s' x") == [
            (TokenKind.STRING, r"it\'s"),
            (TokenKind.DELETE, " "),
            (TokenKind.IDENTIFIER, "x"),
        ]

    def test_escaped_backslash_before_quote(self):
        assert kinds_and_text("'a\\\\'") == [(TokenKind.STRING, "a\\\\")]

    def test_adjacent_strings(self):
        assert kinds_and_text("'a''b'") == [
            (TokenKind.STRING, "a"),
            (TokenKind.STRING, "b"),
        ]


# =============================================================================
# Whitespace and Punctuation Tests
# =============================================================================

class TestWhitespaceAndPunctuation:
    """Whitespace runs and single-character punctuation."""

    def test_whitespace_run(self):
        assert kinds_and_text(" \t\n  ") == [(TokenKind.DELETE, " \t\n  ")]

    def test_carriage_return_is_whitespace(self):
        scanner = Scanner(io.StringIO("a\r\nb", newline=""))
        tokens = list(scanner.tokens())
        assert tokens[1].kind == TokenKind.DELETE
        assert tokens[1].text == "\r\n"
        assert tokens[2].line == 2

    def test_punctuation_kinds(self):
        assert kinds_and_text("();,") == [
            (TokenKind.L_PAREN, "("),
            (TokenKind.R_PAREN, ")"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.COMMA, ","),
        ]

    def test_punctuation_never_extends(self):
        assert kinds_and_text("((") == [
            (TokenKind.L_PAREN, "("),
            (TokenKind.L_PAREN, "("),
        ]

    def test_whitespace_skipped_for_parser(self):
        tokens = significant("f ( x , y ) ;")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.L_PAREN,
            TokenKind.IDENTIFIER,
            TokenKind.COMMA,
            TokenKind.IDENTIFIER,
            TokenKind.R_PAREN,
            TokenKind.SEMICOLON,
        ]


# =============================================================================
# Line Tracking Tests
# =============================================================================

class TestLineTracking:
    """Test line numbers attached to tokens."""

    @pytest.mark.parametrize("newlines", [0, 1, 2, 5])
    def test_line_counts_preceding_newlines(self, newlines):
        tokens = significant("\n" * newlines + "x")
        assert tokens[0].line == newlines + 1

    def test_lines_across_program(self):
        source = "let\n  x = 1\nin\n\n  x"
        tokens = significant(source)
        assert [(t.text, t.line) for t in tokens] == [
            ("let", 1),
            ("x", 2),
            ("=", 2),
            ("1", 2),
            ("in", 3),
            ("x", 5),
        ]

    def test_whitespace_token_starts_on_line_of_its_newline(self):
        """The newline ending a line belongs to that line."""
        tokens = tokenize("x\ny")
        assert tokens[1] == Token(TokenKind.DELETE, "\n", 1)
        assert tokens[2] == Token(TokenKind.IDENTIFIER, "y", 2)

    def test_lookahead_newline_not_counted_early(self):
        """A newline in the lookahead slot has not advanced the line yet."""
        scanner = Scanner.from_string("ab\ncd")
        assert scanner.next_token().text == "ab"
        assert scanner.line == 1
        scanner.next_token()
        assert scanner.line == 2

    def test_comment_newline_counted(self):
        tokens = tokenize("// one\n// two\nz")
        assert [t.line for t in tokens] == [1, 2, 3]

    def test_filename_recorded(self):
        tokens = tokenize("x", filename="prog.rpal")
        assert str(tokens[0].location) == "prog.rpal:1"


# =============================================================================
# Pull Protocol Tests
# =============================================================================

class TestPullProtocol:
    """Test has_more_input/next_token and the token iterator."""

    def test_fresh_scanner_has_input(self):
        """Before any read the source has not reported end of input."""
        assert Scanner.from_string("").has_more_input()

    def test_empty_source_next_token(self):
        scanner = Scanner.from_string("")
        assert scanner.next_token() is None
        assert not scanner.has_more_input()

    def test_drain_manually(self):
        scanner = Scanner.from_string("a+1")
        tokens = []
        while scanner.has_more_input():
            token = scanner.next_token()
            if token is not None:
                tokens.append(token)
        assert [t.text for t in tokens] == ["a", "+", "1"]
        assert scanner.next_token() is None

    def test_lookahead_keeps_input_alive(self):
        """A character left in the lookahead slot counts as more input."""
        scanner = Scanner.from_string("a+")
        scanner.next_token()
        assert scanner.has_more_input()
        assert scanner.next_token().text == "+"
        assert not scanner.has_more_input()

    def test_trailing_whitespace_token(self):
        """A final whitespace run is still returned."""
        scanner = Scanner.from_string("x ")
        assert scanner.next_token().text == "x"
        assert scanner.next_token() == Token(TokenKind.DELETE, " ", 1)
        assert not scanner.has_more_input()

    def test_iteration(self):
        scanner = Scanner.from_string("a b")
        assert [t.text for t in scanner] == ["a", " ", "b"]

    def test_rescanning_is_deterministic(self):
        source = "let f x = x ** 2 // square\nin f 'arg' (3, 4);"
        assert tokenize(source) == tokenize(source)

    def test_close_ends_input(self):
        scanner = Scanner.from_string("abc def")
        scanner.next_token()
        scanner.close()
        assert not scanner.has_more_input()
        assert scanner.next_token() is None

    def test_stream_closed_at_end_of_input(self):
        stream = io.StringIO("x")
        scanner = Scanner(stream)
        list(scanner.tokens())
        assert stream.closed


# =============================================================================
# Malformed Input Tests
# =============================================================================
# The defaults keep the historical behavior: malformed fragments vanish with
# no token and no diagnostic. The strict policies raise instead.

class TestSilentPolicies:
    """Default policies drop malformed input."""

    def test_unterminated_string_produces_nothing(self):
        scanner = Scanner.from_string("'unterminated")
        assert scanner.next_token() is None
        assert not scanner.has_more_input()

    def test_unterminated_string_swallows_rest(self):
        assert kinds_and_text("x 'never closed\ny z") == [
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.DELETE, " "),
        ]

    def test_unterminated_after_backslash(self):
        assert tokenize("'abc\\") == []

    def test_unknown_character_dropped(self):
        assert kinds_and_text("a`b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_unknown_character_call_returns_none(self):
        scanner = Scanner.from_string("`x")
        assert scanner.next_token() is None
        assert scanner.has_more_input()
        assert scanner.next_token().text == "x"

    def test_non_ascii_dropped(self):
        assert kinds_and_text("é1") == [(TokenKind.INTEGER, "1")]


class TestStrictPolicies:
    """Strict policies raise errors with locations."""

    def test_unterminated_string_raises(self):
        options = ScannerOptions(unterminated_string=StringPolicy.RAISE)
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize("x\n'abc", filename="p.rpal", options=options)
        error = exc_info.value
        assert error.location.filename == "p.rpal"
        assert error.location.line == 2
        assert "p.rpal:2: error: unterminated string literal" in str(error)
        assert "'abc" in str(error)

    def test_unknown_character_raises(self):
        options = ScannerOptions(unknown_character=CharacterPolicy.RAISE)
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("ok\n\n`", options=options)
        assert exc_info.value.char == "`"
        assert exc_info.value.location.line == 3

    def test_strict_accepts_valid_source(self):
        source = "let s = 'x' in s // end"
        assert tokenize(source, options=ScannerOptions.strict()) == tokenize(source)


# =============================================================================
# File Scanning Tests
# =============================================================================

class TestScanFile:
    """Scanning from files on disk."""

    def test_scan_file(self, tmp_path):
        path = tmp_path / "prog.rpal"
        path.write_text("let x = 5\nin Print x\n")
        tokens = scan_file(path, skip_deleted=True)
        assert [t.text for t in tokens] == ["let", "x", "=", "5", "in", "Print", "x"]
        assert tokens[0].filename == str(path)
        assert tokens[-1].line == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Scanner.from_file(tmp_path / "missing.rpal")

    def test_encoding_option(self, tmp_path):
        path = tmp_path / "latin.rpal"
        path.write_bytes("'caf\xe9'".encode("latin-1"))
        tokens = scan_file(path, options=ScannerOptions(encoding="latin-1"))
        assert tokens == [Token(TokenKind.STRING, "café", 1, str(path))]

    @pytest.mark.parametrize("text", ["a\rb", "a\r\nb", "x\n\ry"])
    def test_file_and_string_agree(self, tmp_path, text):
        """Line endings are not translated on either entry point."""
        path = tmp_path / "endings.rpal"
        path.write_bytes(text.encode("utf-8"))
        from_file = [(t.text, t.line) for t in scan_file(path)]
        from_string = [(t.text, t.line) for t in tokenize(text)]
        assert from_file == from_string

    def test_lone_carriage_return_is_not_a_newline(self, tmp_path):
        path = tmp_path / "cr.rpal"
        path.write_bytes(b"a\rb")
        tokens = scan_file(path)
        assert [(t.text, t.line) for t in tokens] == [("a", 1), ("\r", 1), ("b", 1)]
